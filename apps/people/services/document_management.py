"""
Document management service.

Documents are stored inline as ``data:<mime>;base64,<payload>`` text.
Uploads may send either a full data URL or bare base64; bare payloads
are wrapped in a data URL using the mime type guessed from the file name.
"""

import base64
import binascii
import logging
import mimetypes
import re
from uuid import UUID

from django.conf import settings
from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.people.models import Document, DocumentFileType

from .exceptions import (
    DocumentNotFoundError,
    InvalidDocumentError,
    DocumentTooLargeError,
)
from .person_management import get_person_by_id

logger = logging.getLogger(__name__)

DATA_URL_PATTERN = re.compile(r'^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?:;[\w-]+=[\w.-]+)*;base64,(?P<payload>.*)$', re.DOTALL)

DEFAULT_MIME_TYPE = 'application/octet-stream'

FILE_TYPE_BY_EXTENSION = {
    'pdf': DocumentFileType.PDF,
    'jpg': DocumentFileType.IMAGE,
    'jpeg': DocumentFileType.IMAGE,
    'png': DocumentFileType.IMAGE,
    'gif': DocumentFileType.IMAGE,
    'doc': DocumentFileType.WORD,
    'docx': DocumentFileType.WORD,
    'txt': DocumentFileType.TEXT,
}

DOWNLOAD_EXTENSION_BY_FILE_TYPE = {
    DocumentFileType.PDF: 'pdf',
    DocumentFileType.IMAGE: 'jpg',
    DocumentFileType.WORD: 'docx',
    DocumentFileType.TEXT: 'txt',
}

IMAGE_EXTENSION_BY_MIME = {
    'image/jpeg': 'jpg',
    'image/png': 'png',
    'image/gif': 'gif',
}

MAX_STORED_EXTENSION_LENGTH = 5


def extension_for_name(file_name: str) -> str:
    """Lower-cased extension of a file name, or 'file' when there is none."""
    if '.' not in file_name:
        return 'file'
    return file_name.rsplit('.', 1)[1].lower() or 'file'


def file_type_for_name(file_name: str) -> str:
    return FILE_TYPE_BY_EXTENSION.get(extension_for_name(file_name), DocumentFileType.FILE)


def split_data_url(file_data: str) -> tuple[str, str]:
    """
    Split a payload into (mime type, base64 text).

    Bare base64 has no mime type and returns an empty string for it.
    """
    match = DATA_URL_PATTERN.match(file_data.strip())
    if match:
        return match.group('mime') or DEFAULT_MIME_TYPE, match.group('payload')
    return '', file_data.strip()


def decode_payload(encoded: str) -> bytes:
    """
    Raises:
        InvalidDocumentError: If the text is not valid base64
    """
    try:
        return base64.b64decode(''.join(encoded.split()), validate=True)
    except (binascii.Error, ValueError):
        raise InvalidDocumentError("File data is not valid base64")


def get_documents_for_person(*, person_id: UUID, owner: User) -> QuerySet[Document]:
    person = get_person_by_id(person_id=person_id, owner=owner)
    return person.documents.all()


def get_document_by_id(*, document_id: UUID, owner: User) -> Document:
    """
    Get a document belonging to one of the owner's people.

    Raises:
        DocumentNotFoundError: If document doesn't exist or belongs to another owner
    """
    try:
        return Document.objects.select_related('person').get(id=document_id, person__owner=owner)
    except Document.DoesNotExist:
        raise DocumentNotFoundError(f"Document with ID {document_id} not found")


@transaction.atomic
def create_document(
    *,
    owner: User,
    person_id: UUID,
    name: str,
    file_name: str,
    file_data: str
) -> Document:
    """
    Attach a document to one of the owner's people.

    Args:
        owner: Authenticated user
        person_id: Person the document belongs to
        name: Display name
        file_name: Original file name, used for the type and extension
        file_data: Data URL or bare base64 payload

    Returns:
        Created Document instance

    Raises:
        PersonNotFoundError: If person doesn't exist or belongs to another owner
        InvalidDocumentError: If the payload is empty or not valid base64
        DocumentTooLargeError: If the decoded payload exceeds the upload limit
    """
    person = get_person_by_id(person_id=person_id, owner=owner)

    mime_type, encoded = split_data_url(file_data)
    content = decode_payload(encoded)
    if not content:
        raise InvalidDocumentError("File data is empty")

    max_bytes = settings.DOCUMENT_MAX_UPLOAD_BYTES
    if len(content) > max_bytes:
        raise DocumentTooLargeError(
            f"File is {len(content)} bytes, the limit is {max_bytes} bytes"
        )

    if not mime_type:
        mime_type = mimetypes.guess_type(file_name)[0] or DEFAULT_MIME_TYPE
        file_data = f"data:{mime_type};base64,{''.join(encoded.split())}"

    extension = extension_for_name(file_name)
    document = Document.objects.create(
        person=person,
        name=name.strip(),
        file_type=file_type_for_name(file_name),
        extension=extension if len(extension) <= MAX_STORED_EXTENSION_LENGTH else '',
        file_size=len(content),
        file_data=file_data,
    )

    logger.info(
        "Stored document %s (%s, %d bytes) for person %s",
        document.id, document.file_type, document.file_size, person.id
    )

    return document


@transaction.atomic
def delete_document(*, owner: User, document_id: UUID) -> None:
    document = get_document_by_id(document_id=document_id, owner=owner)
    logger.info("Deleting document %s from person %s", document.id, document.person_id)
    document.delete()


def download_extension(document: Document) -> str:
    """
    Resolve the extension used for a downloaded file.

    Uses the stored extension, then the file type. Images without a stored
    extension take it from the data URL mime type.
    """
    if document.extension and len(document.extension) <= MAX_STORED_EXTENSION_LENGTH:
        return document.extension

    if document.file_type == DocumentFileType.IMAGE:
        mime_type, _ = split_data_url(document.file_data)
        return IMAGE_EXTENSION_BY_MIME.get(mime_type, 'jpg')

    return DOWNLOAD_EXTENSION_BY_FILE_TYPE.get(document.file_type, 'file')


def prepare_download(*, owner: User, document_id: UUID) -> tuple[bytes, str, str]:
    """
    Decode a stored document for download.

    Returns:
        tuple: (content bytes, mime type, file name)
    """
    document = get_document_by_id(document_id=document_id, owner=owner)

    mime_type, encoded = split_data_url(document.file_data)
    content = decode_payload(encoded)

    return content, mime_type or DEFAULT_MIME_TYPE, f"{document.name}.{download_extension(document)}"
