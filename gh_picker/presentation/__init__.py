"""Presentation layer: session descriptors, item formatting and the picker."""

from .rich_picker import RichPicker
from .session import PickerHandle, Presenter, SessionDescriptor

__all__ = ["PickerHandle", "Presenter", "RichPicker", "SessionDescriptor"]
