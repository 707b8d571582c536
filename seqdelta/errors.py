"""seqdelta exception hierarchy."""


class DeltaError(Exception):
    """Base exception for all seqdelta errors."""


class MalformedDelta(DeltaError):
    """Raised when a delta does not fit the sequence it is applied to."""


class OutOfRange(MalformedDelta, IndexError):
    """Raised when a rewrite region extends past the current target length."""


class OverlappingRewrite(DeltaError, ValueError):
    """Raised when a rewrite is appended out of order, overlapping or touching
    the previous one.  This is a programming error."""


class ScanError(DeltaError):
    """Base class for tokenizer errors: no token starts at the given index."""


class InvalidSpan(DeltaError, ValueError):
    """Raised when a tokenizer returns a span that breaks the span contract."""


class StaleTokenization(DeltaError, AssertionError):
    """Raised by ``Tokenization.validate`` when the stored token boundaries
    disagree with a fresh scan."""
