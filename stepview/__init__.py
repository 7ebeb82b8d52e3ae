# 주요 진입점 재노출
from .errors import (  # noqa: F401
    ViewerError,
    DirectoryUnreadable,
    EmptyCatalog,
    InvalidDimensions,
    DecodeFailure,
    DisplayQueryFailure,
)
from .services.catalog import Catalog  # noqa: F401
from .utils.navigation import Navigator, compute_fit  # noqa: F401
from .ui.state import RenderInstruction, TargetFrame, TransformState  # noqa: F401

__version__ = "0.1.0"
