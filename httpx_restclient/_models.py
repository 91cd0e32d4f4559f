from enum import Enum


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"


BODY_METHODS = (HttpMethod.POST, HttpMethod.PUT)

ResponseState = Enum(
    "ResponseState",
    ["PENDING", "CODE_RESOLVED", "CONTENT_MATERIALIZED", "CANCELLED"],
)
