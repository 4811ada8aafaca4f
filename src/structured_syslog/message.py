"""
Syslog message model and structured data elements
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from .exceptions import DuplicateSDElementError


class StructuredDataElement:
    """
    An SD-ELEMENT: an SD-ID plus an ordered mapping of SD-PARAM names to values.

    Parameters are kept raw, in insertion order. Sanitizing and escaping
    happen only when the element is formatted.
    """

    def __init__(self, sd_id: str):
        self._id = str(sd_id)
        self._params: Dict[str, str] = {}

    @classmethod
    def from_dict(cls, sd_id: str, params: Mapping[Any, Any]) -> "StructuredDataElement":
        """Create an element from a mapping, keeping the mapping's order"""
        element = cls(sd_id)
        for name, value in params.items():
            element.set_param(name, value)
        return element

    @property
    def id(self) -> str:
        return self._id

    @property
    def params(self) -> Mapping[str, str]:
        """Read-only view of the parameters"""
        return MappingProxyType(self._params)

    def set_param(self, name: Any, value: Any) -> None:
        self._params[str(name)] = str(value)

    def get_param(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self._params.get(str(name), default)

    def has_param(self, name: str) -> bool:
        return str(name) in self._params

    def remove_param(self, name: str) -> None:
        """Remove a parameter; missing names are ignored"""
        self._params.pop(str(name), None)

    def items(self) -> Iterator[Tuple[str, str]]:
        """Iterate over (name, value) pairs in insertion order"""
        return iter(list(self._params.items()))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StructuredDataElement):
            return NotImplemented
        return self._id == other._id and list(self._params.items()) == list(
            other._params.items()
        )

    def __repr__(self) -> str:
        return f"StructuredDataElement(id={self._id!r}, params={self._params!r})"


@dataclass(frozen=True)
class SyslogMessage:
    """
    A single syslog message.

    Empty strings in app_name, host_name, proc_id and msg_id stand for the
    NILVALUE. The scalar fields cannot be changed after construction; structured
    data elements may only be appended.
    """

    facility: int
    severity: int
    msg: Union[str, bytes] = ""
    app_name: str = ""
    host_name: str = ""
    proc_id: str = ""
    msg_id: str = ""
    _sd_elements: List[StructuredDataElement] = field(
        default_factory=list, init=False, repr=False, compare=False
    )

    def __post_init__(self):
        object.__setattr__(self, "facility", int(self.facility))
        object.__setattr__(self, "severity", int(self.severity))
        if not isinstance(self.msg, (str, bytes)):
            object.__setattr__(self, "msg", str(self.msg))
        for name in ("app_name", "host_name", "proc_id", "msg_id"):
            value = getattr(self, name)
            object.__setattr__(self, name, "" if value is None else str(value))

    @property
    def sd_elements(self) -> Tuple[StructuredDataElement, ...]:
        return tuple(self._sd_elements)

    def sd_id_exists(self, sd_id: str) -> bool:
        return any(element.id == sd_id for element in self._sd_elements)

    def add_sd_element(self, element: StructuredDataElement) -> None:
        """
        Append a structured data element.

        Raises:
            TypeError: if ``element`` is not a StructuredDataElement
            DuplicateSDElementError: if an element with the same SD-ID exists
        """
        self._check_sd_element(element, self._sd_elements)
        self._sd_elements.append(element)

    def add_sd_elements(self, elements: Iterable[StructuredDataElement]) -> None:
        """
        Append several structured data elements.

        The whole batch is validated first, so on error no element is added.
        """
        pending: List[StructuredDataElement] = []
        for element in elements:
            self._check_sd_element(element, self._sd_elements + pending)
            pending.append(element)
        self._sd_elements.extend(pending)

    @staticmethod
    def _check_sd_element(
        element: Any, existing: List[StructuredDataElement]
    ) -> None:
        if not isinstance(element, StructuredDataElement):
            raise TypeError(
                f"Expected a StructuredDataElement, got {type(element).__name__}"
            )
        if any(other.id == element.id for other in existing):
            raise DuplicateSDElementError(element.id)
