from htmx_tutorial.addressing import AddressingMode, EndpointResolver
from htmx_tutorial.config import AppConfig, load_app_config
from htmx_tutorial.contacts import Contact, ContactStore
from htmx_tutorial.fragments import FragmentKind, FragmentRenderer, Variant

__version__ = "0.1.0"

__all__ = [
    "AddressingMode",
    "AppConfig",
    "Contact",
    "ContactStore",
    "EndpointResolver",
    "FragmentKind",
    "FragmentRenderer",
    "Variant",
    "__version__",
    "load_app_config",
]
