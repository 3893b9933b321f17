"""Exception hierarchy.

Evaluators report rule, data, and reasoning-service problems as failing
ValidationResults. These exceptions only cross the seams where a caller has to
decide what to do: loading rules and talking to the reasoning service.
"""


class LinebuildError(Exception):
    """Base class for linebuild errors."""


class RuleSourceError(LinebuildError):
    """Rules could not be loaded from their source."""


class ReasoningError(LinebuildError):
    """The reasoning service call failed.

    The message is descriptive on purpose: the semantic evaluator classifies
    failures (timeout, rate limit, other) by inspecting it.
    """
