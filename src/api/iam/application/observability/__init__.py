"""Domain-Oriented Observability for IAM application layer."""

from iam.application.observability.event_handler_probe import (
    DefaultIAMEventHandlerProbe,
    IAMEventHandlerProbe,
)

__all__ = [
    "DefaultIAMEventHandlerProbe",
    "IAMEventHandlerProbe",
]
