import unittest
from typing import Protocol

from tokenbind import Container, create_token


class GreeterProtocol(Protocol):
    def say_hello(self) -> str: ...


class ShouterProtocol(Protocol):
    def shout_hello(self) -> str: ...


class Greeter:
    token = create_token("greeter", GreeterProtocol)

    def __init__(self, name: str) -> None:
        self._name = name

    def say_hello(self) -> str:
        return f"Hello, {self._name}!"


class Shouter:
    token = create_token("shouter", ShouterProtocol)

    def __init__(self, greeter: GreeterProtocol) -> None:
        self._greeter = greeter

    def shout_hello(self) -> str:
        return self._greeter.say_hello().upper()


class Other:
    def ping(self) -> str:
        return "pong"


Tokens = {
    "name": create_token("name", str),
    "other": create_token("other", Other),
}


def provide_module(container: Container) -> None:
    container.set(Tokens["name"], "Joy")
    container.set(Tokens["other"], Other())
    container.set(Greeter.token, lambda c: Greeter(c.get(Tokens["name"])))
    container.set(Shouter.token, lambda c: Shouter(c.get(Greeter.token)))


class TestProviderWiring(unittest.TestCase):
    cont: Container

    def setUp(self):
        self.cont = Container().register(provide_module)

    def test_greeter_says_hello(self):
        assert self.cont.get(Greeter.token).say_hello() == "Hello, Joy!"

    def test_shouter_shouts_hello(self):
        assert self.cont.get(Shouter.token).shout_hello() == "HELLO, JOY!"

    def test_always_get_the_same_instance(self):
        assert self.cont.get(Shouter.token) is self.cont.get(Shouter.token)

    def test_always_create_a_new_instance(self):
        assert self.cont.create(Shouter.token) is not self.cont.create(Shouter.token)

    def test_literal_other_never_creates_new_instance(self):
        assert self.cont.create(Tokens["other"]) is self.cont.create(Tokens["other"])
        assert self.cont.get(Tokens["other"]).ping() == "pong"

    def test_overriding_dependency_after_provider(self):
        self.cont.set(Tokens["name"], "Sam")
        assert self.cont.get(Greeter.token).say_hello() == "Hello, Sam!"

    def test_multiple_providers_compose(self):
        extra = create_token("extra", str)

        def provide_extra(container: Container) -> None:
            container.set(extra, lambda c: c.get(Shouter.token).shout_hello() + "!!")

        self.cont.register(provide_extra)

        assert self.cont.get(extra) == "HELLO, JOY!!!"
        assert self.cont.size == 5
