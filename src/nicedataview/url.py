"""URL parameter naming, assembly and reading.

A view never builds URL strings itself. It assembles ``(arguments,
query_parameters)`` with :func:`create_url_parameters` and hands them to a
caller-supplied URL creator. Incoming values are read back through a
:class:`UrlParameterProvider`.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Optional, Protocol, Union
from urllib.parse import quote, urlencode

UrlCreator = Callable[[dict[str, Any], dict[str, Any]], str]


class UrlParameterType(Enum):
    """Where a parameter lives: a path argument or a query parameter."""
    PATH = "path"
    QUERY = "query"


@dataclass(frozen=True)
class PageToken:
    """Paginator position carried in a URL.

    Attributes:
        value: Token value (a page number for offset pagination).
        is_previous: Whether the token points backwards.
    """

    value: str
    is_previous: bool = False

    @classmethod
    def next(cls, value: Union[str, int]) -> PageToken:
        return cls(str(value), is_previous=False)

    @classmethod
    def previous(cls, value: Union[str, int]) -> PageToken:
        return cls(str(value), is_previous=True)


@dataclass(frozen=True)
class UrlConfig:
    """Names and placement of the URL parameters a view reads and writes.

    Attributes:
        page_parameter_name: Parameter holding a "next" page token.
        previous_page_parameter_name: Parameter holding a "previous" page token.
        page_size_parameter_name: Parameter holding the page size.
        sort_parameter_name: Parameter holding the sort token.
        page_parameter_type: Path or query placement for the page parameter.
        previous_page_parameter_type: Placement for the previous page parameter.
        page_size_parameter_type: Placement for the page size parameter.
        sort_parameter_type: Placement for the sort parameter.
        arguments: Base path arguments passed to every URL creator call.
        query_parameters: Base query parameters passed to every URL creator call.
    """

    page_parameter_name: str = "page"
    previous_page_parameter_name: str = "prev-page"
    page_size_parameter_name: str = "pagesize"
    sort_parameter_name: str = "sort"

    page_parameter_type: UrlParameterType = UrlParameterType.QUERY
    previous_page_parameter_type: UrlParameterType = UrlParameterType.QUERY
    page_size_parameter_type: UrlParameterType = UrlParameterType.QUERY
    sort_parameter_type: UrlParameterType = UrlParameterType.QUERY

    arguments: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    query_parameters: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def with_page_parameter(self, name: str, type_: Optional[UrlParameterType] = None) -> UrlConfig:
        return replace(self, page_parameter_name=name, page_parameter_type=type_ or self.page_parameter_type)

    def with_previous_page_parameter(self, name: str, type_: Optional[UrlParameterType] = None) -> UrlConfig:
        return replace(
            self,
            previous_page_parameter_name=name,
            previous_page_parameter_type=type_ or self.previous_page_parameter_type,
        )

    def with_page_size_parameter(self, name: str, type_: Optional[UrlParameterType] = None) -> UrlConfig:
        return replace(
            self,
            page_size_parameter_name=name,
            page_size_parameter_type=type_ or self.page_size_parameter_type,
        )

    def with_sort_parameter(self, name: str, type_: Optional[UrlParameterType] = None) -> UrlConfig:
        return replace(self, sort_parameter_name=name, sort_parameter_type=type_ or self.sort_parameter_type)

    def with_arguments(self, arguments: Mapping[str, Any]) -> UrlConfig:
        return replace(self, arguments=MappingProxyType(dict(arguments)))

    def with_query_parameters(self, parameters: Mapping[str, Any]) -> UrlConfig:
        return replace(self, query_parameters=MappingProxyType(dict(parameters)))


def create_url_parameters(
    page_token: Optional[PageToken],
    page_size: Union[int, str, None],
    sort: Optional[str],
    config: UrlConfig,
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Assemble URL creator input for the given view state.

    Returns:
        ``(arguments, query_parameters)``. Every configured parameter is
        present; unused ones are ``None`` so the creator can drop them.
    """
    arguments = dict(config.arguments)
    query_parameters = dict(config.query_parameters)
    targets = {UrlParameterType.PATH: arguments, UrlParameterType.QUERY: query_parameters}

    next_value = page_token.value if page_token is not None and not page_token.is_previous else None
    previous_value = page_token.value if page_token is not None and page_token.is_previous else None

    targets[config.page_parameter_type][config.page_parameter_name] = next_value
    targets[config.previous_page_parameter_type][config.previous_page_parameter_name] = previous_value
    targets[config.page_size_parameter_type][config.page_size_parameter_name] = page_size
    targets[config.sort_parameter_type][config.sort_parameter_name] = sort

    return arguments, query_parameters


def query_url_creator(path: str) -> UrlCreator:
    """Return a URL creator rooted at ``path``.

    Path arguments become ``/<value>`` segments in key order; query
    parameters are url-encoded. ``None`` values are dropped.

    Example:
        >>> create = query_url_creator("/users")
        >>> create({}, {"page": "2", "sort": None})
        '/users?page=2'
    """

    def create(arguments: dict[str, Any], query_parameters: dict[str, Any]) -> str:
        url = path.rstrip("/")
        for value in arguments.values():
            if value is not None:
                url += "/" + quote(str(value), safe="")
        if not url:
            url = "/"
        query = {k: v for k, v in query_parameters.items() if v is not None}
        if query:
            url += "?" + urlencode(query)
        return url

    return create


class UrlParameterProvider(Protocol):
    def get(self, name: str, type_: UrlParameterType) -> Optional[str]:
        ...


class NullUrlParameterProvider:
    """Provider for views rendered outside a request: every value is missing."""

    def get(self, name: str, type_: UrlParameterType) -> Optional[str]:
        return None


class MappingUrlParameterProvider:
    """Read parameters from plain mappings.

    Typical use in a NiceGUI page is to pass ``request.query_params`` as
    ``query`` and the route's path parameters as ``path``.
    """

    def __init__(self, query: Optional[Mapping[str, Any]] = None, path: Optional[Mapping[str, Any]] = None) -> None:
        self._query = dict(query or {})
        self._path = dict(path or {})

    def get(self, name: str, type_: UrlParameterType) -> Optional[str]:
        source = self._path if type_ is UrlParameterType.PATH else self._query
        value = source.get(name)
        if value is None:
            return None
        return str(value)
