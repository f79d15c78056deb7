"""Multi-mode expansion engine, builders and execution sinks."""

from .models import Binding, MenuItem, PrimitiveCommand
from .expander import expand, is_multi_mode
from .sinks import (
    CallbackSink,
    CommandSink,
    RecordingSink,
    SinkDispatchError,
    StreamSink,
)
from .builders import (
    InvalidLabelError,
    MappingBuilder,
    derive_label,
    mapping_descriptor,
)

__all__ = [
    "Binding",
    "MenuItem",
    "PrimitiveCommand",
    "expand",
    "is_multi_mode",
    "CommandSink",
    "RecordingSink",
    "StreamSink",
    "CallbackSink",
    "SinkDispatchError",
    "MappingBuilder",
    "InvalidLabelError",
    "derive_label",
    "mapping_descriptor",
]
