from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Optional, Type, TypeVar

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from beanwire.application import AbstractApplicationContext

T = TypeVar("T")


def create_bean_dependency(
    context: AbstractApplicationContext,
    bean_name: str,
    required_type: Optional[Type[T]] = None,
) -> Callable[[], Any]:
    """Create a FastAPI Depends() callable that looks a bean up in a context.

    Singleton beans come back as the same instance on every request;
    prototype beans are created fresh for each call.

    Args:
        context: The application context to look beans up in.
        bean_name: Name of the bean.
        required_type: Optional type the bean must be an instance of.

    Returns:
        A callable that FastAPI can use with Depends().

    Example:
        >>> context = ConfigApplicationContext("classpath:beans.yaml")
        >>> get_user_service = create_bean_dependency(context, "userService", UserService)
        >>>
        >>> @app.get("/users")
        >>> async def list_users(service: UserService = Depends(get_user_service)):
        ...     return service.list_users()
    """

    def dependency() -> Any:
        """Look the bean up in the context."""
        return context.get_bean(bean_name, required_type=required_type)

    return dependency


def create_request_bean_dependency(bean_name: str, required_type: Optional[Type[T]] = None) -> Callable[[Request], Any]:
    """Create a FastAPI dependency that uses the context attached to the request.

    Requires the ApplicationContextMiddleware to be installed.

    Args:
        bean_name: Name of the bean.
        required_type: Optional type the bean must be an instance of.

    Returns:
        A callable that looks the bean up in ``request.state.beanwire_context``.
    """

    def request_dependency(request: Request) -> Any:
        """Look the bean up in the request's context."""
        if not hasattr(request.state, "beanwire_context"):
            raise RuntimeError(
                "Request does not have an application context. Did you forget to add ApplicationContextMiddleware?"
            )
        context: AbstractApplicationContext = request.state.beanwire_context
        return context.get_bean(bean_name, required_type=required_type)

    return request_dependency


class ApplicationContextMiddleware(BaseHTTPMiddleware):
    """Middleware that exposes an application context on every request.

    The context is accessible via ``request.state.beanwire_context``.

    Attributes:
        context: The application context to expose.

    Example:
        >>> app = FastAPI()
        >>> app.add_middleware(ApplicationContextMiddleware, context=context)
    """

    def __init__(self, app: FastAPI, context: AbstractApplicationContext):
        super().__init__(app)
        self.context = context

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        request.state.beanwire_context = self.context
        return await call_next(request)


def context_lifespan(context: AbstractApplicationContext) -> Callable[[FastAPI], Any]:
    """Tie an application context to a FastAPI application's lifespan.

    The context is refreshed on startup unless it is already active, and
    closed on shutdown so destroy callbacks run.

    Args:
        context: The application context to manage.

    Returns:
        A lifespan handler for ``FastAPI(lifespan=...)``.

    Example:
        >>> context = ConfigApplicationContext("classpath:beans.xml", refresh=False)
        >>> app = FastAPI(lifespan=context_lifespan(context))
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if not context.is_active():
            context.refresh()
        try:
            yield
        finally:
            context.close()

    return lifespan
