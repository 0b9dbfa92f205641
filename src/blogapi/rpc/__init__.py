"""
blogapi.rpc

Protocol vocabulary for the blog service.

Responsibilities:
- Request/response messages for the five blog RPCs.
- Status codes and the `RpcError` raised by the service layer.
"""

from blogapi.rpc.status import RpcError, StatusCode

__all__ = ["RpcError", "StatusCode"]
