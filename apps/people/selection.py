"""
Customer list selection.

Turns the owner's customers into the subset and order shown in the list
view. Works on plain objects that already carry their derived ledger
values (see ``attach_ledger``), so it never touches the database.

Each person is expected to expose ``name``, ``group_id``, ``balance``,
``last_paid_date`` and a ``contact_numbers()`` method.
"""

from datetime import datetime, timezone as dt_timezone

ALL_GROUPS = 'all'

SORT_NAME = 'name'
SORT_BALANCE_HIGH = 'balance-high'
SORT_BALANCE_LOW = 'balance-low'
SORT_LAST_PAID = 'last-paid'

SORT_KEYS = (SORT_NAME, SORT_BALANCE_HIGH, SORT_BALANCE_LOW, SORT_LAST_PAID)

# Sorts before every real payment date
_NEVER_PAID = datetime.min.replace(tzinfo=dt_timezone.utc)


def _in_group(person, group_filter):
    return person.group_id is not None and str(person.group_id) == str(group_filter)


def _matches(person, needle):
    if needle in person.name.casefold():
        return True
    return any(needle in str(number).casefold() for number in person.contact_numbers())


def _name_key(person):
    return (person.name.casefold(), person.name)


def _paid_key(person):
    paid = person.last_paid_date
    if paid is None:
        return _NEVER_PAID
    if paid.tzinfo is None:
        return paid.replace(tzinfo=dt_timezone.utc)
    return paid


def _sort_last_paid(people):
    owing = [person for person in people if person.balance > 0]
    settled = [person for person in people if not person.balance > 0]
    return sorted(owing, key=_paid_key) + settled


def select_and_order(people, *, group_filter=ALL_GROUPS, search_text='', sort_key=SORT_NAME):
    """
    Filter and order a customer list.

    Args:
        people: Iterable of people with derived balances. Not modified.
        group_filter: Group id to keep, or ``"all"`` (or empty) for everyone
        search_text: Case-insensitive substring of the name or of any
            contact number
        sort_key: One of ``SORT_KEYS``

    Returns:
        New list of the selected people in display order

    Raises:
        ValueError: If sort_key is not recognised
    """
    if sort_key not in SORT_KEYS:
        raise ValueError(f"Unknown sort key: {sort_key!r}")

    selected = list(people)

    if group_filter and group_filter != ALL_GROUPS:
        selected = [person for person in selected if _in_group(person, group_filter)]

    needle = (search_text or '').strip().casefold()
    if needle:
        selected = [person for person in selected if _matches(person, needle)]

    if sort_key == SORT_NAME:
        return sorted(selected, key=_name_key)
    if sort_key == SORT_BALANCE_HIGH:
        return sorted(selected, key=lambda person: person.balance, reverse=True)
    if sort_key == SORT_BALANCE_LOW:
        return sorted(selected, key=lambda person: person.balance)
    return _sort_last_paid(selected)
