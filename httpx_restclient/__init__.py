from httpx_restclient.__version__ import __version__
from httpx_restclient._client import RestClient
from httpx_restclient._connection import (
    BasicAuthConnectionInitializer,
    Connection,
    ConnectionInitializer,
    ConnectionProvider,
    DefaultConnectionProvider,
    HeadersConnectionInitializer,
    TimeoutConnectionInitializer,
)
from httpx_restclient._response import Response

from ._deserializers import (
    HTTP_CODE_DESERIALIZER,
    JSON_DESERIALIZER,
    STREAM_DESERIALIZER,
    STRING_DESERIALIZER,
    ResponseDeserializer,
)
from ._error_handlers import (
    THROW_5XX_ERRORS,
    THROW_ALL_ERRORS,
    ErrorHandler,
    LogErrors,
)
from ._exceptions import (
    HttpApplicationError,
    InvalidArgument,
    ResponseStateError,
    RestClientError,
    TransportError,
    UnsupportedContentType,
)
from ._models import HttpMethod, ResponseState
from ._multipart import File, MultipartEncoder, Stream, Text
from ._urls import URLBuilder, build_url
from ._utils import ResponseStream, property_string, read_stream

__all__ = [
    "__version__",
    "RestClient",
    "Response",
    "ResponseStream",
    "HttpMethod",
    "ResponseState",
    "Connection",
    "ConnectionProvider",
    "DefaultConnectionProvider",
    "ConnectionInitializer",
    "BasicAuthConnectionInitializer",
    "HeadersConnectionInitializer",
    "TimeoutConnectionInitializer",
    "ResponseDeserializer",
    "STRING_DESERIALIZER",
    "HTTP_CODE_DESERIALIZER",
    "STREAM_DESERIALIZER",
    "JSON_DESERIALIZER",
    "ErrorHandler",
    "THROW_ALL_ERRORS",
    "THROW_5XX_ERRORS",
    "LogErrors",
    "RestClientError",
    "InvalidArgument",
    "TransportError",
    "HttpApplicationError",
    "UnsupportedContentType",
    "ResponseStateError",
    "URLBuilder",
    "build_url",
    "MultipartEncoder",
    "Text",
    "File",
    "Stream",
    "property_string",
    "read_stream",
]
