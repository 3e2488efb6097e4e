"""Shared type aliases used across reroute modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler: receives a Request, returns a Response, str or bytes
Handler: TypeAlias = Callable[..., Any]
