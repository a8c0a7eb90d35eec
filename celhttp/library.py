"""
Expression Runtime Bindings

Exposes the executor to an expression runtime as three functions:

    http.Get(url[, headers])
    http.Post(url, data[, headers])
    http.Client(caBundle)

Example usage in a policy expression:
    http.Get("https://svc/api").statusCode == 200
    http.Client(caBundle).Post("https://svc/check", {"user": name}).allowed
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from celhttp.http import HttpExecutor, default_executor


class HttpLibrary:
    """
    Binds an HttpExecutor to function names for an expression runtime.

    Usage:
        library = HttpLibrary()
        env.register_functions(library.functions())
    """

    GET = "http.Get"
    POST = "http.Post"
    CLIENT = "http.Client"

    def __init__(self, executor: Optional[HttpExecutor] = None) -> None:
        self._executor = executor or default_executor()

    @property
    def executor(self) -> HttpExecutor:
        return self._executor

    def get(self, url: str, headers: Optional[Mapping[str, str]] = None) -> dict[str, Any]:
        return self._executor.get(url, headers)

    def post(
        self,
        url: str,
        data: Any,
        headers: Optional[Mapping[str, str]] = None,
    ) -> dict[str, Any]:
        return self._executor.post(url, data, headers)

    def client(self, ca_bundle: str) -> "HttpLibrary":
        """Library bound to an executor trusting `ca_bundle`."""
        derived = self._executor.client(ca_bundle)
        if derived is self._executor:
            return self
        return HttpLibrary(derived)

    def functions(self) -> dict[str, Callable[..., Any]]:
        """Function name -> callable, ready for registration."""
        return {
            self.GET: self.get,
            self.POST: self.post,
            self.CLIENT: self.client,
        }
