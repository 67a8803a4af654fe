"""
People app services layer.

Services contain business logic and orchestrate operations across models.
"""

from .exceptions import (
    PeopleServiceError,
    PersonNotFoundError,
    InvalidPersonDataError,
    ContactNotFoundError,
    DocumentNotFoundError,
    InvalidDocumentError,
    DocumentTooLargeError,
)

from .person_management import (
    get_people_for_owner,
    get_person_by_id,
    attach_ledger,
    get_people_with_balances,
    get_person_detail,
    people_summary,
    create_person,
    update_person,
)

from .contact_management import (
    get_contacts_for_person,
    get_contact_by_id,
    add_contact,
    update_contact,
    delete_contact,
)

from .document_management import (
    extension_for_name,
    file_type_for_name,
    get_documents_for_person,
    get_document_by_id,
    create_document,
    delete_document,
    download_extension,
    prepare_download,
)


__all__ = [
    # Exceptions
    'PeopleServiceError',
    'PersonNotFoundError',
    'InvalidPersonDataError',
    'ContactNotFoundError',
    'DocumentNotFoundError',
    'InvalidDocumentError',
    'DocumentTooLargeError',

    # Person Management
    'get_people_for_owner',
    'get_person_by_id',
    'attach_ledger',
    'get_people_with_balances',
    'get_person_detail',
    'people_summary',
    'create_person',
    'update_person',

    # Contact Management
    'get_contacts_for_person',
    'get_contact_by_id',
    'add_contact',
    'update_contact',
    'delete_contact',

    # Document Management
    'extension_for_name',
    'file_type_for_name',
    'get_documents_for_person',
    'get_document_by_id',
    'create_document',
    'delete_document',
    'download_extension',
    'prepare_download',
]
