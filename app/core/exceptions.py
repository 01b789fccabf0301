"""
Fatal error types for the deploy gate.

Anything raised from here aborts the run and is reported to the invoker
(HTTP 500 for the webhook, a failed step for the GitHub Action). Expected
skips are not errors and never use these classes.
"""


class GateError(Exception):
    """Base class for fatal pipeline errors."""


class ConfigurationError(GateError):
    """A configuration input is missing or invalid."""


class MalformedEventError(GateError):
    """The status event does not have the shape the pipeline relies on."""


class PullRequestLookupError(GateError):
    """Zero or several open pull requests match the status event."""


class TitleParseError(GateError):
    """The pull request title does not encode a package and version change."""

    def __init__(self, title: str, reason: str):
        super().__init__(f"Cannot parse pull request title {title!r}: {reason}")
        self.title = title
        self.reason = reason
