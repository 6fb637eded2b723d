"""
Error types raised by the Bindery build pipeline.

Every error is fatal to the build: the first one raised stops processing of
the remaining content and is reported by the CLI with its kind and the
offending path.
"""


class BuildError(Exception):
    """Base class for all build failures."""

    kind = 'BuildError'

    def __init__(self, message, path=None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self):
        if self.path:
            return f"[{self.kind}] {self.path}: {self.message}"
        return f"[{self.kind}] {self.message}"

    def __reduce__(self):
        # Keep the path when the error crosses a process boundary
        return (self.__class__, (self.message, self.path))


class AccessError(BuildError):
    """File-system failure while walking, reading or writing."""

    kind = 'AccessError'


class InvalidFrontMatterError(BuildError):
    """The document does not have a well-formed front matter block."""

    kind = 'InvalidFrontMatter'


class UnmarshalFrontMatterError(BuildError):
    """The front matter block could not be deserialized into metadata."""

    kind = 'UnmarshalFrontMatter'


class ConvertMarkdownError(BuildError):
    """The Markdown body could not be converted to HTML."""

    kind = 'ConvertMarkdown'


class TemplateError(BuildError):
    """A template failed to load or render."""

    kind = 'TemplateError'


class DuplicateSlugError(BuildError):
    """Two outputs would be written to the same file."""

    kind = 'DuplicateSlug'


class ConfigError(BuildError):
    """The settings file could not be loaded."""

    kind = 'ConfigError'
