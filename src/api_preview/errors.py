"""Exception hierarchy for the preview pipeline."""


class PreviewError(Exception):
    """Base class for every error raised while building a preview."""


class DocumentError(PreviewError):
    """The document could not be parsed or is structurally incomplete."""


class ResolutionError(PreviewError):
    """A ``$ref`` pointer could not be dereferenced."""

    def __init__(self, ref: str, reason: str):
        self.ref = ref
        self.reason = reason
        super().__init__(f"Cannot resolve $ref '{ref}': {reason}")


class RenderError(PreviewError):
    """A single endpoint failed to render."""
