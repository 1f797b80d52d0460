"""
Data models for parsed contract specifications
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .config import DEFAULT_CONTRACT_NAME


@dataclass(frozen=True)
class FunctionParameter:
    """A single `type name` pair from a function signature"""
    type: str
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "name": self.name
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FunctionParameter":
        return cls(type=data.get("type", ""), name=data.get("name", ""))


@dataclass(frozen=True)
class FunctionSpec:
    """Function specification with pre/postconditions"""
    name: str
    description: str = ""
    parameters: Tuple[FunctionParameter, ...] = ()
    preconditions: Tuple[str, ...] = ()
    postconditions: Tuple[str, ...] = ()
    security: str = ""
    events: Tuple[str, ...] = ()  # event names as free text
    returns: str = ""  # empty means no return value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "parameters": [p.to_dict() for p in self.parameters],
            "preconditions": list(self.preconditions),
            "postconditions": list(self.postconditions),
            "security": self.security,
            "events": list(self.events),
            "returns": self.returns
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FunctionSpec":
        return cls(
            name=data.get("name", ""),
            description=data.get("description", ""),
            parameters=tuple(FunctionParameter.from_dict(p) for p in data.get("parameters", [])),
            preconditions=tuple(data.get("preconditions", [])),
            postconditions=tuple(data.get("postconditions", [])),
            security=data.get("security", ""),
            events=tuple(data.get("events", [])),
            returns=data.get("returns", "")
        )


@dataclass(frozen=True)
class StateVariable:
    """State variable declaration; type may contain spaces (mappings)"""
    name: str
    type: str
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "description": self.description
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StateVariable":
        return cls(
            name=data.get("name", ""),
            type=data.get("type", ""),
            description=data.get("description", "")
        )


@dataclass(frozen=True)
class EventSpec:
    """Event declaration with its raw, unparsed parameter list"""
    name: str
    parameters: str = ""
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "parameters": self.parameters,
            "description": self.description
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EventSpec":
        return cls(
            name=data.get("name", ""),
            parameters=data.get("parameters", ""),
            description=data.get("description", "")
        )


@dataclass(frozen=True)
class ContractSpec:
    """
    Complete contract specification.

    Every sequence keeps document order, which becomes emission order in
    generated code. Missing sections are empty, never None.
    """
    contract_name: str
    security_requirements: Tuple[str, ...] = ()
    functions: Tuple[FunctionSpec, ...] = ()
    state_variables: Tuple[StateVariable, ...] = ()
    events: Tuple[EventSpec, ...] = ()
    state_invariants: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "contractName": self.contract_name,
            "securityRequirements": list(self.security_requirements),
            "functions": [fn.to_dict() for fn in self.functions],
            "stateVariables": [var.to_dict() for var in self.state_variables],
            "events": [event.to_dict() for event in self.events],
            "stateInvariants": list(self.state_invariants)
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContractSpec":
        return cls(
            contract_name=data.get("contractName") or DEFAULT_CONTRACT_NAME,
            security_requirements=tuple(data.get("securityRequirements", [])),
            functions=tuple(FunctionSpec.from_dict(fn) for fn in data.get("functions", [])),
            state_variables=tuple(StateVariable.from_dict(v) for v in data.get("stateVariables", [])),
            events=tuple(EventSpec.from_dict(e) for e in data.get("events", [])),
            state_invariants=tuple(data.get("stateInvariants", []))
        )
