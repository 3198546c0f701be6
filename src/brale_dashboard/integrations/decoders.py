"""
Response decoders for endpoints whose body shape varies.

Each decoder is an ordered tuple of shape branches. Branches are tried in
order and the first one that yields a result wins; later branches are never
consulted, even when they would also match.
"""

from collections.abc import Callable
from typing import Any, NamedTuple

from pydantic import ValidationError

from brale_dashboard.core.models import Address
from brale_dashboard.integrations.errors import ResponseFormatError

ID_FIELDS = ("id", "account_id", "accountId")
ME_ID_FIELDS = ("account_id", "id")
DISPLAY_ADDRESS_FIELDS = ("address", "wallet_address", "blockchain_address", "public_address")


class ShapeBranch(NamedTuple):
    """A named decoding branch for one accepted response shape."""

    name: str
    extract: Callable[[Any], Any]


class AccountIdMatch(NamedTuple):
    """Account identifier together with the branch that produced it."""

    account_id: str
    shape: str


class AddressListMatch(NamedTuple):
    """Raw address items together with the branch that produced them."""

    items: list[Any]
    shape: str


def _pick_id(obj: Any, fields: tuple[str, ...] = ID_FIELDS) -> str | None:
    if not isinstance(obj, dict):
        return None
    for field in fields:
        value = obj.get(field)
        # Only non-empty strings and non-zero numbers count as identifiers
        if isinstance(value, bool) or not isinstance(value, str | int):
            continue
        if value:
            return str(value)
    return None


def _first_item_id(items: Any) -> str | None:
    if not isinstance(items, list) or not items:
        return None
    first = items[0]
    if isinstance(first, str):
        return first or None
    return _pick_id(first)


def _get(body: Any, key: str) -> Any:
    return body.get(key) if isinstance(body, dict) else None


ACCOUNT_ID_SHAPES: tuple[ShapeBranch, ...] = (
    ShapeBranch("top_level", _pick_id),
    ShapeBranch("list", _first_item_id),
    ShapeBranch("accounts_list", lambda body: _first_item_id(_get(body, "accounts"))),
    ShapeBranch("data_list", lambda body: _first_item_id(_get(body, "data"))),
    ShapeBranch("data_object", lambda body: _pick_id(_get(body, "data"))),
)

ME_ID_SHAPES: tuple[ShapeBranch, ...] = (
    ShapeBranch("me", lambda body: _pick_id(body, ME_ID_FIELDS)),
)

ADDRESS_LIST_SHAPES: tuple[ShapeBranch, ...] = (
    ShapeBranch("list", lambda body: body if isinstance(body, list) else None),
    ShapeBranch("data_list", lambda body: _get(body, "data") if isinstance(_get(body, "data"), list) else None),
    ShapeBranch(
        "addresses_list",
        lambda body: _get(body, "addresses") if isinstance(_get(body, "addresses"), list) else None,
    ),
)


def _decode_id(body: Any, shapes: tuple[ShapeBranch, ...]) -> AccountIdMatch | None:
    for branch in shapes:
        account_id = branch.extract(body)
        if account_id:
            return AccountIdMatch(account_id=account_id, shape=branch.name)
    return None


def decode_account_id(body: Any) -> AccountIdMatch | None:
    """
    Find an account identifier in a ``GET /accounts`` body.

    Parameters
    ----------
    body : Any
        Decoded JSON body

    Returns
    -------
    AccountIdMatch | None
        First identifier found in branch priority order, or None

    """
    return _decode_id(body, ACCOUNT_ID_SHAPES)


def decode_me_account_id(body: Any) -> AccountIdMatch | None:
    """Find an account identifier in a ``GET /me`` body."""
    return _decode_id(body, ME_ID_SHAPES)


def decode_address_list(body: Any) -> AddressListMatch:
    """
    Extract the raw address items from an address-list body.

    Parameters
    ----------
    body : Any
        Decoded JSON body

    Returns
    -------
    AddressListMatch
        Raw items and the branch that matched

    Raises
    ------
    ResponseFormatError
        If the body matches none of the accepted shapes

    """
    for branch in ADDRESS_LIST_SHAPES:
        items = branch.extract(body)
        if items is not None:
            return AddressListMatch(items=items, shape=branch.name)

    msg = "Invalid response format from addresses API"
    raise ResponseFormatError(msg)


def parse_address(item: dict[str, Any]) -> Address:
    """
    Convert a raw address item into an Address model.

    Parameters
    ----------
    item : dict[str, Any]
        Raw address object

    Returns
    -------
    Address
        Parsed address

    Raises
    ------
    ResponseFormatError
        If the item lacks required fields

    """
    display = next((item[key] for key in DISPLAY_ADDRESS_FIELDS if item.get(key)), None)
    raw_id = item.get("id")

    try:
        return Address(
            id=str(raw_id) if raw_id is not None else None,
            type=item.get("type"),
            usage=item.get("usage"),
            transfer_types=item.get("transfer_types") or [],
            description=item.get("description"),
            address=str(display) if display is not None else None,
        )
    except ValidationError as e:
        msg = f"Invalid address entry: {e}"
        raise ResponseFormatError(msg) from e


def address_type(item: Any) -> str | None:
    """Return the ``type`` field of a raw address item, if any."""
    value = _get(item, "type")
    return value if isinstance(value, str) else None
