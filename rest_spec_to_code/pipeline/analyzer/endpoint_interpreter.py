"""
Endpoint schema interpreter.

Phase 2 of the api pipeline: turn each URL template of an endpoint into one
request builder (two when the endpoint accepts a body: a typed one and one
taking a generic document), skipping templates known to be irregular.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...utils import snake_to_camel_case
from ..config import CodeGeneratorConfig
from ..registry import AssemblyRegistry
from ..schema_ast.nodes import BodyRequirement, EndpointDescriptor, ParamType, UrlTemplate
from ..schema_ast.parser import placeholder_name
from .ir_nodes import BodyStyle, MethodDef, MethodGroupDef, ParamDef, ParamKind, UrlPart

if TYPE_CHECKING:
    from ..backends.base import CodeBackend

logger = logging.getLogger(__name__)

METHOD_DESCRIPTION = "The http method used to execute the request"
BODY_DESCRIPTION = "The body to be sent with the request"


def built_path(url_parts: list[UrlPart]) -> str:
    """Render a URL in the interpolated form the skip lists are matched against.

    Scalar placeholders become ``\\(name)``, list placeholders
    ``\\(name.joined(separator: ","))`` and literal segments stay as written,
    so ``/{index}/{type}/_mapping`` with scalar parts builds to
    ``/\\(index)/\\(type)/_mapping``.
    """
    pieces = []
    for part in url_parts:
        if part.param is None:
            pieces.append(part.text)
        elif part.is_list:
            pieces.append(f'\\({snake_to_camel_case(part.param)}.joined(separator: ","))')
        else:
            pieces.append(f"\\({snake_to_camel_case(part.param)})")
    return "/".join(pieces)


class EndpointSchemaInterpreter:
    """Turns endpoint descriptors into request builder definitions."""

    def __init__(
        self,
        registry: AssemblyRegistry | None = None,
        backend: CodeBackend | None = None,
        config: CodeGeneratorConfig | None = None,
    ):
        self.registry = registry
        self.backend = backend
        self.config = config or CodeGeneratorConfig()

    def interpret(self, descriptor: EndpointDescriptor) -> list[MethodDef]:
        """
        Build the request builders of one endpoint.

        Args:
            descriptor: The endpoint descriptor

        Returns:
            Method definitions in template order (typed overload first)
        """
        methods: list[MethodDef] = []
        for template in descriptor.url_templates:
            if self.should_skip(template):
                logger.debug("Skipping %s template %s", descriptor.name, template.path)
                continue
            methods.extend(self._build_methods(descriptor, template))
        return methods

    def interpret_group(self, descriptor: EndpointDescriptor) -> MethodGroupDef | None:
        """Build and register the method group of an endpoint.

        Returns:
            The group, or None when every template was skipped
        """
        methods = self.interpret(descriptor)
        if not methods:
            logger.info("No request builders generated for %s", descriptor.name)
            return None

        group = MethodGroupDef(name=descriptor.name, receiver=self.config.receiver_type, methods=tuple(methods))
        if self.registry is not None and self.backend is not None:
            self.registry.register(self.backend.definition_name(group), self.backend.render(group))
        return group

    def should_skip(self, template: UrlTemplate) -> bool:
        """Check the template against the irregular endpoint lists."""
        url_parts = self._url_parts(template)
        if any(part.param is None and part.text in self.config.skip_segments for part in url_parts):
            return True

        path = built_path(url_parts)
        if any(path.startswith(prefix) for prefix in self.config.skip_path_prefixes):
            return True
        return any(path.endswith(suffix) for suffix in self.config.skip_path_suffixes)

    def _url_parts(self, template: UrlTemplate) -> list[UrlPart]:
        url_parts = []
        for segment in template.segments:
            name = placeholder_name(segment)
            param = template.params.get(name) if name is not None else None
            if param is None:
                # Unresolved placeholders stay literal text
                url_parts.append(UrlPart(text=segment))
            else:
                url_parts.append(UrlPart(text=segment, param=param.name, is_list=param.type == ParamType.LIST))
        return url_parts

    def _build_methods(self, descriptor: EndpointDescriptor, template: UrlTemplate) -> list[MethodDef]:
        url_parts = self._url_parts(template)
        params: list[ParamDef] = []
        for part in url_parts:
            if part.param is None or any(p.name == part.param for p in params):
                continue
            params.append(
                ParamDef(
                    name=part.param,
                    kind=ParamKind.LIST if part.is_list else ParamKind.SCALAR,
                    description=template.params[part.param].description,
                )
            )

        params.append(
            ParamDef(
                name="method",
                kind=ParamKind.METHOD,
                description=METHOD_DESCRIPTION,
                default=descriptor.default_method,
                is_required=False,
            )
        )

        if descriptor.body == BodyRequirement.ABSENT:
            styles = [BodyStyle.NONE]
        else:
            params.append(
                ParamDef(
                    name="body",
                    kind=ParamKind.BODY,
                    description=BODY_DESCRIPTION,
                    is_required=descriptor.body == BodyRequirement.REQUIRED,
                )
            )
            styles = [BodyStyle.TYPED, BodyStyle.GENERIC]

        return [
            MethodDef(
                name=descriptor.name,
                path=template.path,
                params=tuple(params),
                url_parts=tuple(url_parts),
                allowed_methods=descriptor.allowed_methods,
                body_requirement=descriptor.body,
                body_style=style,
                documentation=descriptor.documentation,
            )
            for style in styles
        ]
