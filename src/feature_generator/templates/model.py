"""Freezed model classes for request and response bodies.

Generated models are always constructible: required properties must be
passed, every other property gets a type-keyed default and is never null.
"""

from feature_generator.naming import to_snake_case


def dart_type(schema: dict) -> str:
    """Dart type of a model property schema. Nested ``$ref`` stays a map."""
    if "$ref" in schema:
        return "Map<String, dynamic>"

    schema_type = schema.get("type")
    if schema_type == "integer":
        return "int"
    if schema_type == "number":
        return "double"
    if schema_type == "boolean":
        return "bool"
    if schema_type == "array":
        items = schema.get("items")
        if isinstance(items, dict):
            return f"List<{dart_type(items)}>"
        return "List<dynamic>"
    if schema_type == "object":
        return "Map<String, dynamic>"
    return "String"


def default_value(type_name: str) -> str:
    if type_name.startswith("List<"):
        return "[]"
    if type_name.startswith("Map<"):
        return "{}"
    return {
        "int": "0",
        "double": "0.0",
        "bool": "false",
    }.get(type_name, '""')


def render_fields(schema: dict) -> list[str]:
    properties = schema.get("properties")
    if not isinstance(properties, dict):
        return []
    required = schema.get("required")
    required = {r for r in required if isinstance(r, str)} if isinstance(required, list) else set()

    fields = []
    for name, prop in properties.items():
        type_name = dart_type(prop if isinstance(prop, dict) else {})
        if name in required:
            fields.append(f"    required {type_name} {name},")
        else:
            fields.append(f"    @Default({default_value(type_name)}) {type_name} {name},")
    return fields


def _fallback_fields(is_response: bool) -> list[str]:
    fields = [
        '    @Default("") String message,',
        "    @Default(true) bool success,",
    ]
    if is_response:
        fields.append("    @Default(null) dynamic data,")
    return fields


def render_model(class_name: str, schema: dict | None, is_response: bool = False) -> str:
    """Render one model file.

    Schemas without object properties (missing, arrays, primitives) get a
    generic message/success envelope instead.
    """
    fields = render_fields(schema) if schema else []
    if not fields:
        fields = _fallback_fields(is_response)

    snake = to_snake_case(class_name)
    body = "\n".join(fields)
    return f"""import 'package:freezed_annotation/freezed_annotation.dart';

part '{snake}.freezed.dart';
part '{snake}.g.dart';

@freezed
class {class_name} with _${class_name} {{
  const factory {class_name}({{
{body}
  }}) = _{class_name};

  factory {class_name}.fromJson(Map<String, dynamic> json) =>
      _${class_name}FromJson(json);
}}
"""
