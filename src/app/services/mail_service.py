"""Mail Service Interface

Defines the contract for delivering e-mail.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class MailAttachment:
    filename: str
    content: bytes
    mime_type: str = "application/pdf"


@dataclass(frozen=True)
class MailMessage:
    to: str
    subject: str
    html: str
    attachments: List[MailAttachment] = field(default_factory=list)


class MailService(ABC):
    """
    Abstract mail transport

    Implementations:
    - SMTP
    - Logging (development fallback)
    """

    @abstractmethod
    async def send(self, message: MailMessage) -> bool:
        """
        Deliver a message

        Args:
            message: MailMessage to deliver

        Returns:
            True if the message was accepted, False otherwise
        """
        pass

    async def close(self) -> None:
        """Release transport resources (called at shutdown)"""
        return None
