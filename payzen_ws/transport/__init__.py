from .credentials import ConfigOverride, Credentials
from .factory import ClientFactory, PortResponse, ServicePort
from .signer import CredentialSigner, compute_auth_token

__all__ = [
    "ClientFactory",
    "ConfigOverride",
    "CredentialSigner",
    "Credentials",
    "PortResponse",
    "ServicePort",
    "compute_auth_token",
]
