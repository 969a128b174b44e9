"""
Unit tests for request dispatch.
"""

import pytest

from userserver.http import (
    HTTPStatus,
    RouteKind,
    Router,
    UserRequest,
    ok,
)


def make_request(kind: RouteKind) -> UserRequest:
    return UserRequest(kind=kind, method="GET", path="/users")


class TestRouter:
    """Tests for Router."""

    def test_dispatch_to_registered_handler(self):
        router = Router()
        router.add(RouteKind.READ_ALL, lambda request: ok("[]"))

        response = router.dispatch(make_request(RouteKind.READ_ALL))

        assert response.status == HTTPStatus.OK
        assert response.body == "[]"

    def test_decorator_registration(self):
        router = Router()

        @router.route(RouteKind.CREATE)
        def create(request):
            return ok("created")

        assert router.routes[RouteKind.CREATE] is create
        assert router.dispatch(make_request(RouteKind.CREATE)).body == "created"

    def test_add_chaining(self):
        router = Router()
        result = (router
            .add(RouteKind.CREATE, lambda r: ok("c"))
            .add(RouteKind.DELETE, lambda r: ok("d")))

        assert result is router
        assert set(router.routes) == {RouteKind.CREATE, RouteKind.DELETE}

    def test_not_found_route(self):
        response = Router().dispatch(make_request(RouteKind.NOT_FOUND))

        assert response.status == HTTPStatus.NOT_FOUND
        assert response.body == "404 Not Found"

    def test_unregistered_kind_is_not_found(self):
        response = Router().dispatch(make_request(RouteKind.UPDATE))

        assert response.status == HTTPStatus.NOT_FOUND

    def test_not_found_cannot_be_registered(self):
        with pytest.raises(ValueError):
            Router().add(RouteKind.NOT_FOUND, lambda r: ok())

    def test_handler_exception_becomes_500(self):
        router = Router()

        def broken(request):
            raise RuntimeError("boom")

        router.add(RouteKind.READ_ONE, broken)
        response = router.dispatch(make_request(RouteKind.READ_ONE))

        assert response.status == HTTPStatus.INTERNAL_SERVER_ERROR
        assert response.body == "Error"
