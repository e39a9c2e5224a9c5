"""
Errors raised by the invoice PDF generator.
"""

GENERATION_FAILED_MESSAGE = "Failed to generate premium PDF"


class PDFGenerationError(Exception):
    """
    Raised when a document cannot be rendered.

    The message is generic. The underlying exception is chained
    as ``__cause__`` and logged by the generator.
    """

    def __init__(self, message: str = GENERATION_FAILED_MESSAGE):
        self.message = message
        super().__init__(message)
