"""
Request parameter types and provider.
"""

from .provider import RequestParamsProvider
from .request_params import RequestParams

__all__ = ["RequestParams", "RequestParamsProvider"]
