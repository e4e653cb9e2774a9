"""REST generator: renders operations as async methods of the admin client."""

import re

from restdoc_codegen.config import GeneratorConfig
from restdoc_codegen.generator.types import rust_type, wrap_type
from restdoc_codegen.parser.base import OperationEntity, Parameter, ParameterKind
from restdoc_codegen.parser.naming import normalize_field_name, to_snake_case
from restdoc_codegen.parser.registry import TypeRegistry
from restdoc_codegen.parser.schema import ApiSchema

_PATH_VAR_RE = re.compile(r"\{([^}]+)\}")


class RestRenderer:
    """Renders the ``impl`` block holding one method per operation."""

    def __init__(self, config: GeneratorConfig | None = None):
        self.config = config or GeneratorConfig()

    def render(self, schema: ApiSchema) -> str:
        lines = ["use super::*;", "", f"impl<'a> {self.config.client_name}<'a> {{"]
        used: dict[str, int] = {}
        methods = []
        for operation in schema.operations:
            fn_name = self._unique_name(to_snake_case(operation.name), used)
            methods.append(self._render_method(fn_name, operation, schema.registry))
        lines.append("\n\n".join(methods))
        lines.append("}")
        return "\n".join(lines) + "\n"

    def _unique_name(self, name: str, used: dict[str, int]) -> str:
        count = used.get(name, 0)
        used[name] = count + 1
        return name if count == 0 else f"{name}_{count + 1}"

    def _param_name(self, parameter: Parameter) -> str:
        name, _, _ = normalize_field_name(parameter.name, self.config.reserved_names)
        return name

    def _render_method(self, fn_name: str, operation: OperationEntity, registry: TypeRegistry) -> str:
        response = operation.response
        return_type = wrap_type(rust_type(response.type, registry), response.is_array, False)

        lines = [f"    /// {operation.name}", "    ///", f"    /// Resource: {operation.comment}"]
        lines.append(f"    pub async fn {fn_name}(")
        lines.append("        &self,")
        for parameter in operation.parameters:
            param_type = wrap_type(
                rust_type(parameter.type, registry), parameter.is_array, parameter.is_optional
            )
            lines.append(f"        {self._param_name(parameter)}: {param_type},")
        lines.append(f"    ) -> Result<{return_type}, {self.config.error_type}> {{")

        lines.append("        let mut builder = self")
        lines.append("            .client")
        lines.append(f'            .{operation.method.lower()}(&format!("{{}}{self._format_path(operation)}", self.url));')
        for parameter in operation.parameters:
            lines.extend(self._render_parameter(parameter))
        lines.append("        let response = builder.send().await?;")
        if response.type.name == "unit" and not response.is_array:
            lines.append("        error_check(response).await?;")
            lines.append("        Ok(())")
        else:
            lines.append("        Ok(error_check(response).await?.json().await?)")
        lines.append("    }")
        return "\n".join(lines)

    def _format_path(self, operation: OperationEntity) -> str:
        """Replace ``{var}`` placeholders with the matching Rust argument names."""
        names = {
            p.name: self._param_name(p) for p in operation.parameters if p.kind is ParameterKind.PATH
        }

        def replace(match: re.Match) -> str:
            var = match.group(1)
            return "{" + names.get(var, to_snake_case(var)) + "}"

        return _PATH_VAR_RE.sub(replace, operation.path)

    def _render_parameter(self, parameter: Parameter) -> list[str]:
        name = self._param_name(parameter)
        if parameter.kind is ParameterKind.QUERY:
            if parameter.is_optional:
                return [
                    f"        if let Some(v) = {name} {{",
                    f'            builder = builder.query(&[("{parameter.name}", v)]);',
                    "        }",
                ]
            return [f'        builder = builder.query(&[("{parameter.name}", {name})]);']
        if parameter.kind is ParameterKind.BODY:
            return [f"        builder = builder.json(&{name});"]
        if parameter.kind is ParameterKind.FORM_DATA:
            return [f"        builder = builder.form(&{name});"]
        return []
