"""Backend gateway: one outbound call, decoded JSON or a classified failure."""

from .backend import BackendFailure, BackendGateway, BackendResult, FailureKind, HttpGateway, HttpMethod

__all__ = ["BackendFailure", "BackendGateway", "BackendResult", "FailureKind", "HttpGateway", "HttpMethod"]
