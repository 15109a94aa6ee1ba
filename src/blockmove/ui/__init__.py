"""Text UI layer for blockmove."""

from .app import BlockMoveTuiApp
from .controller import UIController, UISnapshot

__all__ = ["BlockMoveTuiApp", "UIController", "UISnapshot"]
