from __future__ import annotations

from .model import RequiredNames, Schema, TypeList


def _carries_required_names(schema: Schema | None) -> bool:
    return schema is not None and bool(schema.required_names)


def fix_required_properties(schema: Schema) -> None:
    """Turn per-key ``required: true`` markers into standard ``required`` arrays.

    Properties marked as required are listed on their parent object and the
    markers are erased. When a ``then``/``else`` branch or an ``anyOf``/
    ``allOf``/``oneOf`` member lists required names, the requirement is
    conditional and the node's own list is cleared. Running it twice is a no-op.
    """
    if schema.properties is not None:
        names = schema.ensure_required_names()
        for name, prop in schema.properties.items():
            if prop.required_flag:
                names.add(name)
            if prop.required_flag is not None:
                prop.required = RequiredNames()
            fix_required_properties(prop)
        if not schema.type.matches("object"):
            schema.type = TypeList(["object"])
    elif schema.required_flag is not None:
        # no enclosing object reads markers below this point
        schema.required = RequiredNames()

    for child in (schema.then, schema.if_, schema.else_, schema.items, schema.not_):
        if child is not None:
            fix_required_properties(child)
    for members in (schema.any_of, schema.all_of, schema.one_of):
        for member in members or ():
            fix_required_properties(member)
    if isinstance(schema.additional_properties, Schema):
        fix_required_properties(schema.additional_properties)

    conditional = _carries_required_names(schema.then) or _carries_required_names(schema.else_)
    for members in (schema.one_of, schema.all_of, schema.any_of):
        if any(_carries_required_names(member) for member in members or ()):
            conditional = True
    if conditional and isinstance(schema.required, RequiredNames):
        schema.required.names.clear()
