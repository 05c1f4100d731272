"""IAM-specific outbox infrastructure.

Contains the serializer for IAM domain events. It is registered with the
composite serializer at application startup.
"""

from iam.infrastructure.outbox.serializer import IAMEventSerializer

__all__ = ["IAMEventSerializer"]
