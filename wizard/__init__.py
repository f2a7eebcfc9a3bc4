"""Receipt wizard: state machine, product normalizer and record assembler."""
from .assembler import assemble
from .normalizer import normalize
from .state_machine import NO_MATCH_NOTICE, ReceiptWizard, SaveResult, Step

__all__ = ["assemble", "normalize", "ReceiptWizard", "SaveResult", "Step", "NO_MATCH_NOTICE"]
