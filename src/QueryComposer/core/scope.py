"""Scopes and boolean connectives.

A ``Scope`` owns an ordered list of components (restrictions, nested
connectives, or anything else implementing ``to_params``). Connectives are
scopes that render their members as one boolean phrase joined by AND/OR, or
negated, and contribute that phrase as a single ``fq`` clause.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Union

from QueryComposer.core.params import ParameterContributor, Params, collect_params, merge_params
from QueryComposer.core.restriction import Restriction, restriction_type
from QueryComposer.core.setup import FieldSetup
from QueryComposer.utils.log import trace_log

if TYPE_CHECKING:
    from QueryComposer.core.dynamic_query import DynamicQuery

RestrictionKind = Union[str, type[Restriction]]


class Scope:
    """Ordered collection of filter components bound to a field setup."""

    def __init__(self, setup: FieldSetup) -> None:
        self.setup = setup
        self._components: list[Any] = []

    @property
    def components(self) -> tuple[Any, ...]:
        return tuple(self._components)

    def add_component(self, component: ParameterContributor) -> Any:
        """Register a component and return it."""
        self._components.append(component)
        trace_log.debug("Registered component: %s", type(component).__name__)
        return component

    def add_restriction(
        self,
        field_name: str,
        kind: RestrictionKind,
        value: Any,
        negated: bool = False,
    ) -> Restriction:
        """Add a restriction on a field.

        Args:
            field_name: Domain field name, resolved through the setup.
            kind: Restriction class or registered name (``equal_to``...).
            value: Restriction value.
            negated: Whether to exclude matching documents instead.

        Returns:
            The registered restriction.
        """
        restriction_class = restriction_type(kind) if isinstance(kind, str) else kind
        restriction = restriction_class(self.setup.field(field_name), value, negated)
        return self.add_component(restriction)

    def add_negated_restriction(self, field_name: str, kind: RestrictionKind, value: Any) -> Restriction:
        return self.add_restriction(field_name, kind, value, negated=True)

    def add_conjunction(self) -> Conjunction:
        return self.add_component(Conjunction(self.setup))

    def add_disjunction(self) -> Disjunction:
        return self.add_component(Disjunction(self.setup))

    def add_negation(self) -> Negation:
        return self.add_component(Negation(self.setup))

    def dynamic_query(self, base_name: str) -> DynamicQuery:
        """Return a helper for fields under the ``base_name`` dynamic template."""
        from QueryComposer.core.dynamic_query import DynamicQuery

        return DynamicQuery(base_name, self)

    def to_params(self) -> Params:
        return merge_params(collect_params(self._components))


class Connective(Scope):
    """Scope whose members render as one boolean phrase.

    A connective with a single non-empty member renders as that member
    alone, and so takes on the member's sign.
    """

    operator = "AND"

    @property
    def negated(self) -> bool:
        sole = self._sole_member()
        return sole is not None and sole.negated

    def to_params(self) -> Params:
        phrase = self.to_boolean_phrase()
        if not phrase:
            return {}
        return {"fq": [phrase]}

    def to_boolean_phrase(self) -> str:
        members = self._phrased_members()
        if not members:
            return ""
        if len(members) == 1:
            return members[0][1]
        joined = (self._joined_phrase(member, phrase) for member, phrase in members)
        return "(" + f" {self.operator} ".join(joined) + ")"

    def to_positive_boolean_phrase(self) -> str:
        sole = self._sole_member()
        if sole is not None and sole.negated:
            return sole.to_positive_boolean_phrase()
        return self.to_boolean_phrase()

    def _phrased_members(self) -> list[tuple[Any, str]]:
        members = []
        for member in self._components:
            phrase = member.to_boolean_phrase()
            if phrase:
                members.append((member, phrase))
        return members

    def _sole_member(self) -> Any:
        members = self._phrased_members()
        return members[0][0] if len(members) == 1 else None

    def _joined_phrase(self, member: Any, phrase: str) -> str:
        return phrase


class Conjunction(Connective):
    operator = "AND"


class Disjunction(Connective):
    operator = "OR"

    def _joined_phrase(self, member: Any, phrase: str) -> str:
        # a purely negative clause matches nothing inside OR
        if member.negated:
            return f"(*:* {phrase})"
        return phrase


class Negation(Connective):
    """NOT over the conjunction of its members."""

    @property
    def negated(self) -> bool:
        return not self._double_negative()

    def to_boolean_phrase(self) -> str:
        if self._double_negative():
            return self._sole_member().to_positive_boolean_phrase()
        positive = self.to_positive_boolean_phrase()
        return f"-{positive}" if positive else ""

    def to_positive_boolean_phrase(self) -> str:
        return Connective.to_boolean_phrase(self)

    def _double_negative(self) -> bool:
        sole = self._sole_member()
        return sole is not None and sole.negated
