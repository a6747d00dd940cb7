"""Domain types for legacy signatures and converted signature definitions."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class TensorRef:
    """Reference to a graph tensor by name."""

    name: str


@dataclass(frozen=True)
class RegressionSignature:
    """Legacy regression signature with one input and one output tensor."""

    input: TensorRef
    output: TensorRef


@dataclass(frozen=True)
class ClassificationSignature:
    """Legacy classification signature with class and score outputs."""

    input: TensorRef
    classes: TensorRef
    scores: TensorRef


@dataclass(frozen=True)
class GenericSignature:
    """Legacy generic signature: role-less bindings keyed by arbitrary strings."""

    bindings: Mapping[str, TensorRef] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "bindings", MappingProxyType(dict(self.bindings)))


type LegacySignature = RegressionSignature | ClassificationSignature | GenericSignature


@dataclass(frozen=True)
class LegacySignatureSet:
    """Decoded legacy ``Signatures`` record.

    ``default`` is ``None`` both when the record carries no default signature
    and when the default signature has no active variant.
    """

    default: LegacySignature | None = None
    named: Mapping[str, LegacySignature] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "named", MappingProxyType(dict(self.named)))


@dataclass
class TensorInfo:
    """Tensor entry of a signature definition."""

    name: str


@dataclass
class SignatureDef:
    """Unified signature definition consumed by the serving runtime."""

    inputs: dict[str, TensorInfo] = field(default_factory=dict)
    outputs: dict[str, TensorInfo] = field(default_factory=dict)
    method_name: str = ""

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly view of the signature definition."""
        return {
            "inputs": {key: info.name for key, info in self.inputs.items()},
            "outputs": {key: info.name for key, info in self.outputs.items()},
            "method_name": self.method_name,
        }


type SignatureDefMap = dict[str, SignatureDef]
