"""The input mask editing engine."""

from .input_mask import OP_BACKSPACE, OP_INPUT, InputMask
from .options import MaskOptions
from .transaction import EditTransaction, EngineSnapshot

__all__ = [
    "InputMask",
    "MaskOptions",
    "EditTransaction",
    "EngineSnapshot",
    "OP_BACKSPACE",
    "OP_INPUT",
]
