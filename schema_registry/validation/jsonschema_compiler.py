"""
JSON Schema Compiler

ValidatorCompiler adapter backed by the jsonschema library (draft-07).

On top of plain jsonschema validation it adds:
- Type coercion: scalar children are converted toward their declared type
  (including types declared through $ref, allOf, anyOf and oneOf) before
  any keyword sees them
- Default injection: missing properties with a 'default' are filled in,
  except inside anyOf/oneOf/not/if branches
- Cross-schema $ref: every compiled schema carrying an '$id' is added to a
  shared referencing.Registry, so later schemas may point at it
  (relative refs resolve against the referencing schema's own '$id')

anyOf/oneOf/not/if branches run against a private copy of the data; only
the branch that decides the outcome of anyOf/oneOf writes its coercions
back.

Unresolvable $refs are reported at compile time, never at validation time.
"""

import copy
import logging
import re
from contextvars import ContextVar
from typing import Any, Iterator

from jsonschema import Draft7Validator, validators
from jsonschema.exceptions import SchemaError, ValidationError
from jsonschema_specifications import REGISTRY as SPECIFICATIONS
from referencing import Registry, Resource
from referencing.exceptions import Unresolvable
from referencing.jsonschema import DRAFT7

from schema_registry.errors import SchemaCompileError
from schema_registry.validation.coercion import (
    NOT_COERCIBLE,
    coerce_value,
    overwrite_in_place,
)
from schema_registry.validation.ports import (
    CompiledValidator,
    ValidationIssue,
    ValidationOutcome,
    ValidatorCompiler,
    ValidatorOptions,
)

logger = logging.getLogger(__name__)

# Keywords whose values are data, not subschemas
_DATA_KEYWORDS = frozenset({"enum", "const", "default", "examples"})

# Keywords whose params carry the keyword's bound as "limit"
_LIMIT_KEYWORDS = frozenset({
    "minimum", "maximum", "exclusiveMinimum", "exclusiveMaximum",
    "minLength", "maxLength", "minItems", "maxItems",
    "minProperties", "maxProperties", "multipleOf",
})

# Guards against $ref cycles and deeply nested combinators
_MAX_DEPTH = 32

# True while a combinator branch is being tried; defaults stay out of it
_in_branch: ContextVar[bool] = ContextVar("in_branch", default=False)


def _json_pointer(parts) -> str:
    return "".join(
        "/" + str(part).replace("~", "~0").replace("/", "~1") for part in parts
    )


def _active_resolver(validator):
    # jsonschema keeps the resolver for the schema currently being applied
    # (base URI included) in a private attribute; this is the only place
    # that reads it.
    return validator._resolver


def _declared_types(resolver, subschema: Any, depth: int = 0) -> list[str]:
    """
    Return the types a subschema declares, in schema order.

    Follows $ref (which, in draft-07, overrides any sibling keyword) and,
    when there is no 'type', gathers the types of allOf/anyOf/oneOf branches.
    """
    if depth > _MAX_DEPTH or not isinstance(subschema, dict):
        return []

    ref = subschema.get("$ref")
    if isinstance(ref, str):
        try:
            resolved = resolver.lookup(ref)
        except Unresolvable:
            return []
        return _declared_types(resolved.resolver, resolved.contents, depth + 1)

    declared = subschema.get("type")
    if isinstance(declared, str):
        return [declared]
    if isinstance(declared, list):
        return [t for t in declared if isinstance(t, str)]

    types: list[str] = []
    for keyword in ("allOf", "anyOf", "oneOf"):
        branches = subschema.get(keyword)
        if not isinstance(branches, list):
            continue
        for branch in branches:
            for type_name in _declared_types(resolver, branch, depth + 1):
                if type_name not in types:
                    types.append(type_name)
    return types


def _coerce_slot(validator, container, key, subschema) -> None:
    types = _declared_types(_active_resolver(validator), subschema)
    coerced = coerce_value(container[key], types)
    if coerced is not NOT_COERCIBLE:
        logger.debug(f"Coerced {container[key]!r} -> {coerced!r} at {key!r}")
        container[key] = coerced


def _inject_defaults(properties: Any, instance: dict) -> None:
    if not isinstance(properties, dict) or _in_branch.get():
        return
    for prop, subschema in properties.items():
        if prop not in instance and isinstance(subschema, dict) and "default" in subschema:
            instance[prop] = copy.deepcopy(subschema["default"])


def _try_branch(validator, instance, subschema, schema_path=None):
    """Apply a branch to a copy of the instance; return (copy, errors)."""
    candidate = copy.deepcopy(instance)
    token = _in_branch.set(True)
    try:
        errors = list(validator.descend(candidate, subschema, schema_path=schema_path))
    finally:
        _in_branch.reset(token)
    return candidate, errors


def _extend_draft7(options: ValidatorOptions):
    """Build a Draft7Validator subclass with coercion and defaults wired in."""
    base = Draft7Validator.VALIDATORS
    original_properties = base["properties"]
    original_pattern_properties = base["patternProperties"]
    original_additional = base["additionalProperties"]
    original_items = base["items"]
    original_additional_items = base["additionalItems"]
    original_required = base["required"]

    def properties(validator, properties, instance, schema):
        if validator.is_type(instance, "object"):
            if options.coerce_types:
                for prop, subschema in properties.items():
                    if prop in instance:
                        _coerce_slot(validator, instance, prop, subschema)
            if options.use_defaults:
                _inject_defaults(properties, instance)
        yield from original_properties(validator, properties, instance, schema)

    def pattern_properties(validator, patterns, instance, schema):
        if options.coerce_types and validator.is_type(instance, "object"):
            for pattern, subschema in patterns.items():
                for prop in list(instance):
                    if re.search(pattern, prop):
                        _coerce_slot(validator, instance, prop, subschema)
        yield from original_pattern_properties(validator, patterns, instance, schema)

    def additional_properties(validator, additional, instance, schema):
        if options.coerce_types and isinstance(additional, dict) and validator.is_type(instance, "object"):
            declared = schema.get("properties", {})
            patterns = list(schema.get("patternProperties", {}))
            for prop in list(instance):
                if prop in declared or any(re.search(p, prop) for p in patterns):
                    continue
                _coerce_slot(validator, instance, prop, additional)
        yield from original_additional(validator, additional, instance, schema)

    def items(validator, items, instance, schema):
        if options.coerce_types and validator.is_type(instance, "array"):
            if isinstance(items, list):
                for index, subschema in enumerate(items[:len(instance)]):
                    _coerce_slot(validator, instance, index, subschema)
            else:
                for index in range(len(instance)):
                    _coerce_slot(validator, instance, index, items)
        yield from original_items(validator, items, instance, schema)

    def additional_items(validator, additional, instance, schema):
        positional = schema.get("items")
        if (
            options.coerce_types
            and isinstance(additional, dict)
            and isinstance(positional, list)
            and validator.is_type(instance, "array")
        ):
            for index in range(len(positional), len(instance)):
                _coerce_slot(validator, instance, index, additional)
        yield from original_additional_items(validator, additional, instance, schema)

    def required(validator, required, instance, schema):
        # 'required' may be evaluated before 'properties'; defaults count
        # as present either way.
        if options.use_defaults and validator.is_type(instance, "object"):
            _inject_defaults(schema.get("properties"), instance)
        yield from original_required(validator, required, instance, schema)

    def any_of(validator, any_of, instance, schema):
        failures = []
        for index, subschema in enumerate(any_of):
            candidate, errors = _try_branch(validator, instance, subschema, index)
            if not errors:
                overwrite_in_place(instance, candidate)
                return
            failures.extend(errors)
        yield ValidationError(
            f"{instance!r} is not valid under any of the given schemas",
            context=failures,
        )

    def one_of(validator, one_of, instance, schema):
        failures = []
        matched = []
        winner = None
        for index, subschema in enumerate(one_of):
            candidate, errors = _try_branch(validator, instance, subschema, index)
            if errors:
                failures.extend(errors)
                continue
            if winner is None:
                winner = candidate
            matched.append(subschema)

        if not matched:
            yield ValidationError(
                f"{instance!r} is not valid under any of the given schemas",
                context=failures,
            )
        elif len(matched) > 1:
            reprs = ", ".join(repr(each) for each in matched)
            yield ValidationError(f"{instance!r} is valid under each of {reprs}")
        else:
            overwrite_in_place(instance, winner)

    def not_(validator, not_schema, instance, schema):
        _, errors = _try_branch(validator, instance, not_schema)
        if not errors:
            yield ValidationError(f"{instance!r} should not be valid under {not_schema!r}")

    def if_(validator, if_schema, instance, schema):
        _, errors = _try_branch(validator, instance, if_schema)
        if not errors:
            if "then" in schema:
                yield from validator.descend(instance, schema["then"], schema_path="then")
        elif "else" in schema:
            yield from validator.descend(instance, schema["else"], schema_path="else")

    return validators.extend(
        Draft7Validator,
        {
            "properties": properties,
            "patternProperties": pattern_properties,
            "additionalProperties": additional_properties,
            "items": items,
            "additionalItems": additional_items,
            "required": required,
            "anyOf": any_of,
            "oneOf": one_of,
            "not": not_,
            "if": if_,
        },
    )


def _iter_refs(node: Any, resolver, top: bool = True) -> Iterator[tuple[str, Any]]:
    """Yield (ref, resolver) for every $ref in a schema, honouring nested $id."""
    if isinstance(node, list):
        for item in node:
            yield from _iter_refs(item, resolver, top=False)
        return
    if not isinstance(node, dict):
        return
    if not top and isinstance(node.get("$id"), str):
        resolver = resolver.in_subresource(DRAFT7.create_resource(node))
    ref = node.get("$ref")
    if isinstance(ref, str):
        yield ref, resolver
    for key, value in node.items():
        if key in _DATA_KEYWORDS:
            continue
        yield from _iter_refs(value, resolver, top=False)


def _issue_params(error: ValidationError) -> dict[str, Any]:
    keyword, value = error.validator, error.validator_value
    if keyword == "type":
        return {"type": value}
    if keyword in _LIMIT_KEYWORDS:
        return {"limit": value}
    if keyword == "required":
        for prop in value:
            if error.message == f"{prop!r} is a required property":
                return {"missingProperty": prop}
        return {}
    if keyword == "enum":
        return {"allowedValues": value}
    if keyword == "const":
        return {"allowedValue": value}
    if keyword in ("format", "pattern"):
        return {keyword: value}
    return {}


class JsonSchemaValidator(CompiledValidator):
    """A compiled draft-07 validator with coercion and defaults."""

    def __init__(self, validator, options: ValidatorOptions, schema: dict[str, Any]):
        self._validator = validator
        self._options = options
        self._schema = schema

    @property
    def schema(self) -> dict[str, Any]:
        return self._schema

    def check(self, data: Any) -> ValidationOutcome:
        if self._options.coerce_types:
            types = _declared_types(
                _active_resolver(self._validator), self._validator.schema
            )
            coerced = coerce_value(data, types)
            if coerced is not NOT_COERCIBLE:
                data = coerced

        errors = self._validator.iter_errors(data)
        if not self._options.all_errors:
            first = next(errors, None)
            errors = [first] if first is not None else []

        issues = [
            ValidationIssue(
                keyword=str(error.validator),
                instance_path=_json_pointer(error.absolute_path),
                schema_path=_json_pointer(error.absolute_schema_path),
                message=error.message,
                params=_issue_params(error),
            )
            for error in errors
        ]
        return ValidationOutcome(valid=not issues, data=data, issues=issues)


class JsonSchemaCompiler(ValidatorCompiler):
    """
    Compiles draft-07 schemas with the jsonschema library.

    Holds the referencing.Registry shared by every schema it compiles;
    one compiler per SchemaRegistry keeps $id namespaces independent.
    """

    def __init__(self, options: ValidatorOptions | None = None):
        self._options = options or ValidatorOptions()
        self._validator_class = _extend_draft7(self._options)
        self._format_checker = (
            Draft7Validator.FORMAT_CHECKER if self._options.check_formats else None
        )
        # $id -> resource for every schema compiled so far
        self._resources: dict[str, Resource] = {}
        self._registry: Registry = SPECIFICATIONS

    @property
    def options(self) -> ValidatorOptions:
        return self._options

    @property
    def known_ids(self) -> list[str]:
        """Schema '$id's currently resolvable through $ref."""
        return list(self._resources)

    def compile(self, schema: dict[str, Any]) -> JsonSchemaValidator:
        if not isinstance(schema, dict):
            raise SchemaCompileError(
                f"schema must be a JSON object, got {type(schema).__name__}"
            )

        try:
            self._validator_class.check_schema(schema)
        except SchemaError as e:
            raise SchemaCompileError(e.message) from e

        document = copy.deepcopy(schema)
        # A '$schema' at a document root makes jsonschema swap in the plain
        # Draft7Validator when a $ref lands there, losing coercion and defaults.
        working = {key: value for key, value in document.items() if key != "$schema"}
        resource = DRAFT7.create_resource(working)
        schema_id = working.get("$id")

        registry = self._registry
        if isinstance(schema_id, str) and schema_id:
            registry = registry.with_resource(schema_id, resource)

        resolver = registry.resolver_with_root(resource)
        for ref, ref_resolver in _iter_refs(working, resolver):
            try:
                ref_resolver.lookup(ref)
            except Unresolvable as e:
                raise SchemaCompileError(f"can't resolve reference {ref}") from e

        validator = self._validator_class(
            working,
            registry=registry,
            format_checker=self._format_checker,
        )

        if isinstance(schema_id, str) and schema_id:
            self._resources[schema_id] = resource
            self._registry = registry
            logger.debug(f"Schema id {schema_id} is now resolvable")

        return JsonSchemaValidator(validator, self._options, document)
