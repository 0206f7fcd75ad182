from .base import AbstractDynamicMailerProvider
from .custom import CustomMailerProvider, ICredentialsRepository
from .options import GLOBAL_ADDRESS_TYPES, deep_merge, set_global_address

__all__ = [
    "AbstractDynamicMailerProvider",
    "CustomMailerProvider",
    "ICredentialsRepository",
    "GLOBAL_ADDRESS_TYPES",
    "deep_merge",
    "set_global_address",
]
