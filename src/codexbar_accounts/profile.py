"""Derive account identity from the ID token stored in `auth.json`."""

from pathlib import Path

import orjson
from pydantic import ValidationError
from structlog import get_logger

from codexbar_accounts.exceptions import TokenDecodeError
from codexbar_accounts.models import AccountInfo, AuthFile
from codexbar_accounts.tokens import decode_id_token_claims


logger = get_logger(__name__)

AUTH_FILE_NAME = "auth.json"
CREDENTIALS_FILE_NAME = ".credentials.json"


def load_auth_file(account_dir: Path) -> AuthFile | None:
    """Load and validate an account's auth file.

    Returns:
        Parsed auth file, or None if it is missing or malformed
    """
    auth_path = account_dir / AUTH_FILE_NAME
    try:
        data = orjson.loads(auth_path.read_bytes())
    except FileNotFoundError:
        return None
    except OSError as e:
        logger.debug("auth_file_unreadable", path=str(auth_path), error=str(e))
        return None
    except orjson.JSONDecodeError:
        logger.debug("auth_file_invalid_json", path=str(auth_path))
        return None

    try:
        return AuthFile.model_validate(data)
    except ValidationError:
        logger.debug("auth_file_unexpected_schema", path=str(auth_path))
        return None


def load_account_info(account_dir: Path) -> AccountInfo | None:
    """Derive email and plan for the account stored in `account_dir`.

    A freshly created account has no auth file yet, so every failure here is
    reported as "no profile" rather than as an error.

    Args:
        account_dir: Account directory

    Returns:
        AccountInfo if an ID token could be decoded, None otherwise
    """
    auth = load_auth_file(account_dir)
    if auth is None or auth.tokens is None or not auth.tokens.id_token:
        return None

    try:
        claims = decode_id_token_claims(auth.tokens.id_token)
    except TokenDecodeError as e:
        logger.debug(
            "id_token_decode_failed",
            path=str(account_dir),
            error=e.message,
            **e.details,
        )
        return None

    return claims.to_account_info()


def load_email(account_dir: Path) -> str | None:
    info = load_account_info(account_dir)
    return info.email if info else None
