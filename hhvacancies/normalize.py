import json

from .logger import get_logger
from .result import (
    ClientNetworkUnavailable,
    RemoteError,
    Result,
    Success,
    TransportErrorKind,
    TransportException,
)
from .schema import PayloadError, PayloadKind, parse_payload
from .transport import RawOutcome

logger = get_logger()


def network_unavailable() -> Result:
    return ClientNetworkUnavailable()


def is_success_status(status: int) -> bool:
    return 200 <= status <= 299


def normalize(outcome: RawOutcome, kind: PayloadKind) -> Result:
    """
    Classify a raw HTTP exchange into a Result.

    Checks run in order and the first match wins: timeout, other I/O
    failure, non-2xx status or unusable body, then success. Parsing errors
    are downgraded to RemoteError; nothing raised while decoding escapes.
    """
    if outcome.error is TransportErrorKind.TIMEOUT:
        return TransportException(TransportErrorKind.TIMEOUT)
    if outcome.error is not None:
        return TransportException(TransportErrorKind.IO)

    if not is_success_status(outcome.status):
        return RemoteError(outcome.status)
    if not outcome.body or not outcome.body.strip():
        logger.warning("Empty response body", status=outcome.status, kind=kind.value)
        return RemoteError(outcome.status)

    try:
        data = json.loads(outcome.body)
        payload = parse_payload(kind, data)
    except (json.JSONDecodeError, PayloadError) as e:
        logger.warning("Unparsable response body", status=outcome.status, kind=kind.value, error=str(e))
        return RemoteError(outcome.status)
    except Exception as e:
        # any other parser failure is still reported as RemoteError
        logger.error("Unexpected error parsing body", kind=kind.value, error=repr(e))
        return RemoteError(outcome.status)

    return Success(payload)
