import enum


class RequestKind(str, enum.Enum):
    PREFLIGHT = "PREFLIGHT"
    LIST = "LIST"
    GET_ONE = "GET_ONE"
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    PUT_REJECTED = "PUT_REJECTED"
    DELETE = "DELETE"
    UNSUPPORTED = "UNSUPPORTED"


def parse_id(raw: str | None) -> int | None:
    """Lenient id parsing: anything that is not a positive integer means "no id"."""
    if raw is None:
        return None
    try:
        value = int(raw.strip())
    except ValueError:
        return None
    return value if value > 0 else None


def classify_request(method: str, query_id: int | None, form_id: int | None) -> RequestKind:
    method = method.upper()
    if method == "OPTIONS":
        return RequestKind.PREFLIGHT
    if method == "GET":
        return RequestKind.GET_ONE if query_id else RequestKind.LIST
    if method == "POST":
        return RequestKind.UPDATE if form_id else RequestKind.CREATE
    if method == "PUT":
        return RequestKind.PUT_REJECTED
    if method == "DELETE":
        return RequestKind.DELETE
    return RequestKind.UNSUPPORTED
