"""Mojang (Yggdrasil) username/password login for launchers."""

from .client import MojangRestAPI, handle_request_error, is_network_error
from .clienttoken import generate_client_token
from .codes import INTERNAL_ERRORS, classify, decipher_error_code, is_internal_error
from .errors import AuthenticationFailed, AuthException, PromptTimeout, RequestError
from .models import (
    AuthSession,
    Credentials,
    ErrorBody,
    ErrorCode,
    Response,
    ResponseStatus,
    Session,
)
from .prompt import AuthContext, ModalField, ModalSpec, prompt_credentials
from .provider import MojangAuthProvider, error_message, provider
from .status import (
    StatusColor,
    StatusEntry,
    default_statuses,
    essential_statuses,
    status_to_hex,
)

__all__ = [
    "INTERNAL_ERRORS",
    "AuthContext",
    "AuthException",
    "AuthSession",
    "AuthenticationFailed",
    "Credentials",
    "ErrorBody",
    "ErrorCode",
    "ModalField",
    "ModalSpec",
    "MojangAuthProvider",
    "MojangRestAPI",
    "PromptTimeout",
    "RequestError",
    "Response",
    "ResponseStatus",
    "Session",
    "StatusColor",
    "StatusEntry",
    "classify",
    "decipher_error_code",
    "default_statuses",
    "error_message",
    "essential_statuses",
    "generate_client_token",
    "handle_request_error",
    "is_internal_error",
    "is_network_error",
    "prompt_credentials",
    "provider",
    "status_to_hex",
]
