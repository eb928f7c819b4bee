"""
Studio credentials: OS keychain first, environment second.

The keychain entries live under the ``freepik-studio`` service. Anything not
stored there is read from the environment, which ``load_dotenv()`` has
already populated from ``.env`` when running under the CLI.
"""

import os
import logging
from pathlib import Path
from typing import Dict, Optional

import keyring
from dotenv import dotenv_values
from keyring.errors import KeyringError, PasswordDeleteError

logger = logging.getLogger(__name__)

SERVICE_NAME = "freepik-studio"

KNOWN_KEYS = {
    "FREEPIK_API_KEY": "Freepik API key (required)",
    "TELEGRAM_BOT_TOKEN": "Telegram bot token (result sharing)",
    "TELEGRAM_CHAT_ID": "Telegram chat id (result sharing)",
    "TELEGRAM_THREAD_ID": "Telegram forum thread id (result sharing)",
}


def _from_keychain(key_name: str) -> Optional[str]:
    try:
        return keyring.get_password(SERVICE_NAME, key_name) or None
    except KeyringError as e:
        logger.debug(f"Keychain lookup failed for {key_name}: {e}")
        return None


def key_source(key_name: str) -> str:
    """Where ``key_name`` resolves from: ``keychain``, ``env`` or ``not_set``."""
    if _from_keychain(key_name):
        return "keychain"
    if os.environ.get(key_name):
        return "env"
    return "not_set"


def get_api_key(key_name: str, fallback_to_env: bool = True) -> Optional[str]:
    """
    Resolve a credential.

    Args:
        key_name: e.g. ``FREEPIK_API_KEY``
        fallback_to_env: Consult the environment when the keychain has nothing

    Returns:
        The value, or None when it is configured nowhere
    """
    value = _from_keychain(key_name)
    if value:
        return value
    if fallback_to_env:
        return os.environ.get(key_name) or None
    return None


def set_api_key(key_name: str, value: str) -> bool:
    try:
        keyring.set_password(SERVICE_NAME, key_name, value)
    except KeyringError as e:
        logger.error(f"Failed to store {key_name} in keychain: {e}")
        return False
    logger.info(f"Stored {key_name} in keychain")
    return True


def delete_api_key(key_name: str) -> bool:
    try:
        keyring.delete_password(SERVICE_NAME, key_name)
    except PasswordDeleteError:
        logger.warning(f"{key_name} not found in keychain")
        return False
    except KeyringError as e:
        logger.error(f"Failed to delete {key_name} from keychain: {e}")
        return False
    logger.info(f"Deleted {key_name} from keychain")
    return True


def list_api_keys() -> Dict[str, str]:
    """Source of every known key, see :func:`key_source`."""
    return {key_name: key_source(key_name) for key_name in KNOWN_KEYS}


def import_from_env_file(env_path: str) -> Dict[str, bool]:
    """
    Copy the known, non-empty keys of a ``.env`` file into the keychain.

    Returns:
        Key name -> whether it was stored
    """
    env_file = Path(env_path)
    if not env_file.exists():
        raise FileNotFoundError(f"File not found: {env_path}")

    values = dotenv_values(env_file)
    return {
        key_name: set_api_key(key_name, value)
        for key_name, value in values.items()
        if key_name in KNOWN_KEYS and value
    }
