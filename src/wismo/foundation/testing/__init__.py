"""Test doubles for the backend gateway."""

from .fake import FakeGateway, Invocation

__all__ = ["FakeGateway", "Invocation"]
