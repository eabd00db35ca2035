"""
file-provider - a file projected into a declarative infrastructure resource.

Manages the existence and content of a single file through the
check / create / read / update / delete / diff lifecycle. The controller can
be served through Pulumi's dynamic provider interface or driven locally from
the command line.
"""

from .context import OperationContext
from .controller import FileController
from .lifecycle import Provider, ResourceLifecycle, build_provider
from .models import FileArgs, FileState
from .settings import FileProviderSettings, get_settings, reload_settings

__version__ = "0.1.0"
__all__ = [
    "FileArgs",
    "FileController",
    "FileProviderSettings",
    "FileState",
    "OperationContext",
    "Provider",
    "ResourceLifecycle",
    "build_provider",
    "get_settings",
    "reload_settings",
]
