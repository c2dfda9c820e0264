"""Per-invocation compile context."""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class CompileContext:
    """
    State passed explicitly down the compile call chain.

    Attributes:
        compile_protobuf: When False, protobuf compilation triggered from a
            downstream build hook is skipped. The driver clears it for
            everything it calls so the pipeline cannot re-enter itself.
    """

    compile_protobuf: bool = True

    def suppressed(self) -> "CompileContext":
        """Copy of this context with protobuf compilation disabled."""
        return replace(self, compile_protobuf=False)
