"""Run-scoped state shared across recursive generator invocations."""

from pydantic import BaseModel


class RunContext(BaseModel):
    """Registries visible to one run and every recursive sub-run it spawns.

    resolved_references: symbolic reference URLs (fragment stripped) that were
        already resolved; each is processed at most once per run.
    generated_messages: bare type name -> fully-qualified message name, for
        reuse by later references to the same type.
    """

    resolved_references: set[str] = set()
    generated_messages: dict[str, str] = {}

    def qualified_name(self, type_name: str, package: str) -> str:
        return self.generated_messages.get(type_name, f"{package}.{type_name}")

    def register_message(self, type_name: str, package: str) -> None:
        self.generated_messages[type_name] = f"{package}.{type_name}"
