"""Build HTTP requests from operation descriptors and caller arguments."""

import json
import string
from dataclasses import dataclass, field
from typing import Any, Mapping
from urllib.parse import quote

from ..catalog import OperationDescriptor
from ..config import AuthMode, ConnectionConfig, PrivateAppAuth
from ..constants import ACCESS_TOKEN_HEADER, BODY_METHODS, USER_AGENT
from ..exceptions import InvalidArgumentsError
from ..utils.validators import find_missing_arguments
from .envelope import wrap
from .transport import Request


@dataclass(frozen=True)
class Command:
    """One invocation of an operation: what to call, with which arguments, as whom."""

    operation: OperationDescriptor
    auth: AuthMode = field(repr=False)
    arguments: Mapping[str, Any] = field(default_factory=dict)


def path_placeholders(path_template: str) -> list[str]:
    """Return the ``{name}`` placeholders of a path template."""
    return [name for _, name, _, _ in string.Formatter().parse(path_template) if name]


def format_query_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(str(item) for item in value)
    return value


class RequestBuilder:
    """Turn a Command into a transport-level Request."""

    def __init__(self, config: ConnectionConfig) -> None:
        self.config = config

    def command(self, operation: OperationDescriptor, arguments: Mapping[str, Any]) -> Command:
        return Command(operation=operation, arguments=dict(arguments), auth=self.config.auth)

    def build(self, command: Command) -> Request:
        """Build the request for a command.

        Path placeholders are filled from the arguments of the same name.
        The remaining arguments go to the query string for GET and DELETE,
        and to the JSON body for POST and PUT, unless the parameter schema
        pins a location. Bodies are nested under the operation root key.

        Raises:
            InvalidArgumentsError: If a path placeholder or required argument is missing
        """
        operation = command.operation
        arguments = {name: value for name, value in command.arguments.items() if value is not None}

        placeholders = path_placeholders(operation.path_template)
        missing = find_missing_arguments(arguments, placeholders + [
            name for name in operation.required_parameters if name not in placeholders
        ])
        if missing:
            raise InvalidArgumentsError(operation.name, missing)

        path = operation.path_template.format(
            **{name: quote(str(arguments[name]), safe="") for name in placeholders}
        )

        sends_body = operation.http_method in BODY_METHODS
        params: dict[str, Any] = {}
        body: dict[str, Any] = {}
        for name, value in arguments.items():
            if name in placeholders:
                continue

            location = operation.parameter_location(name)
            if location == "query" or not sends_body:
                params[operation.wire_name(name)] = format_query_value(value)
            else:
                body[operation.wire_name(name)] = value

        headers = {
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }

        payload = None
        if sends_body:
            headers["Content-Type"] = "application/json"
            payload = json.dumps(wrap(body, operation.root_key, operation.http_method)).encode("utf-8")

        auth = None
        if isinstance(command.auth, PrivateAppAuth):
            auth = (command.auth.api_key, command.auth.password)
        else:
            headers[ACCESS_TOKEN_HEADER] = command.auth.access_token

        return Request(
            method=operation.http_method,
            url=f"{self.config.base_url}{path}",
            headers=headers,
            params=params,
            body=payload,
            auth=auth,
        )
