"""
no-unused-fields: every schema field should be selected by some document.
"""

from __future__ import annotations

from collections.abc import Iterable

from graphql import GraphQLInterfaceType, GraphQLObjectType

from ..config import UNUSED_FIELDS_RULE
from ..documents.nodes import location_of
from .base import AnalysisRule, Diagnostic, Suggestion


class UnusedFieldsRule(AnalysisRule):
    """Reports schema fields that no operation or fragment in the corpus selects."""

    RULE_ID = UNUSED_FIELDS_RULE
    MESSAGES = {UNUSED_FIELDS_RULE: 'Field "{{ fieldName }}" is unused'}
    SUGGESTIONS = {"remove-field": "Remove `{{ fieldName }}` field"}
    requires_siblings = True

    def targets(self, session) -> Iterable[GraphQLObjectType | GraphQLInterfaceType]:
        for type_name in sorted(session.schema.type_map):
            named = session.schema.type_map[type_name]
            if type_name.startswith("__"):
                continue
            if isinstance(named, (GraphQLObjectType, GraphQLInterfaceType)):
                yield named

    def check_target(self, session, target: GraphQLObjectType | GraphQLInterfaceType) -> list[Diagnostic]:
        used_fields = session.used_fields()
        diagnostics = []
        for field_name, field_def in target.fields.items():
            if used_fields.is_used(target.name, field_name):
                continue
            node = field_def.ast_node.name if field_def.ast_node is not None else None
            data = {"fieldName": field_name, "typeName": target.name}
            diagnostics.append(
                Diagnostic(
                    rule_id=self.RULE_ID,
                    message_id=UNUSED_FIELDS_RULE,
                    data=data,
                    location=location_of(node),
                    suggestions=(Suggestion("remove-field", data),),
                )
            )
        return diagnostics

    def target_path(self, target) -> str:
        location = location_of(target.ast_node)
        return location.path if location else ""
