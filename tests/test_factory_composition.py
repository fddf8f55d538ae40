import unittest
from unittest.mock import MagicMock

from tokenbind import AliasProvider, ClassProvider, Container, FactoryProvider, ValueProvider


class Outbox:
    def __init__(self):
        self.sent = []

    def deliver(self, recipient: str, body: str) -> None:
        self.sent.append((recipient, body))


class Notifier:
    def __init__(self, outbox: Outbox, signature: str) -> None:
        self._outbox = outbox
        self._signature = signature

    def notify(self, recipient: str, text: str) -> None:
        self._outbox.deliver(recipient, f"{text}\n-- {self._signature}")


def make_notifier(container: Container) -> Notifier:
    return Notifier(container.get(Outbox), container.get("signature"))


class TestFactoryComposition(unittest.TestCase):
    cont: Container

    def setUp(self):
        self.cont = Container(
            [
                FactoryProvider(Notifier, make_notifier),
                AliasProvider("notifier", Notifier),
                ClassProvider(Outbox, Outbox),
                ValueProvider("signature", "ops team"),
            ]
        )

    def test_factory_pulls_dependencies_from_container(self):
        notifier = self.cont.get("notifier")
        notifier.notify("alice@example.com", "deploy finished")

        assert self.cont.get(Outbox).sent == [("alice@example.com", "deploy finished\n-- ops team")]

    def test_alias_and_dependencies_are_shared(self):
        assert self.cont.get("notifier") is self.cont.get(Notifier)
        assert self.cont.get(Notifier)._outbox is self.cont.get(Outbox)  # noqa: SLF001

    def test_replacing_dependency_before_first_lookup(self):
        outbox = Outbox()
        outbox.deliver = MagicMock(wraps=outbox.deliver)
        self.cont.add_provider(ValueProvider(Outbox, outbox))

        self.cont.get(Notifier).notify("bob@example.com", "disk full")

        assert outbox.deliver.call_count == 1
        assert outbox.deliver.call_args[0][0] == "bob@example.com"
        assert outbox.deliver.call_args[0][1].endswith("-- ops team")
