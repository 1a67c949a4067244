"""Component dialect descriptors.

A dialect fixes the surface syntax of generated components: attribute
casing, file extensions and the type names used in typed output. It never
changes the SVG content itself. Adding a framework means adding one
descriptor here.
"""

from pydantic import BaseModel, ConfigDict, Field

from .errors import UnsupportedDialectError


class Dialect(BaseModel):
    """Surface syntax rules for one UI library."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Config key, e.g. 'react'")
    label: str = Field(..., description="Display name")
    camel_case_attributes: bool = Field(..., description="Rename kebab-case SVG attributes")
    class_attribute: str = Field("class", description="Attribute name used for CSS classes")
    style_object: bool = Field(False, description="Write inline style as an object literal")
    ts_extension: str = Field(".tsx", description="Component file extension (TypeScript)")
    js_extension: str = Field(".jsx", description="Component file extension (JavaScript)")
    type_import: str = Field(..., description="Type imports for the barrel module header")
    icon_type: str = Field(..., description="Type of one icon component")
    props_import: str = Field(..., description="Import for the folder-mode types file")
    props_type: str = Field(..., description="Prop type accepted by every icon")
    forward_ref_source: str | None = Field(None, description="Module exporting forwardRef")
    ref_type_import: str | None = Field(None, description="Type imports when refs are forwarded")
    ref_icon_type: str | None = Field(None, description="Icon type when refs are forwarded")

    @property
    def supports_forward_ref(self) -> bool:
        return self.forward_ref_source is not None

    def extension(self, typescript: bool) -> str:
        """Return the per-icon file extension."""
        return self.ts_extension if typescript else self.js_extension

    def forward_ref_import(self) -> str | None:
        """Return the forwardRef import statement, if the dialect has one."""
        if self.forward_ref_source is None:
            return None
        return f'import {{ forwardRef }} from "{self.forward_ref_source}";'


REACT = Dialect(
    name="react",
    label="React",
    camel_case_attributes=True,
    class_attribute="className",
    style_object=True,
    type_import='import type { ComponentProps, JSX } from "react";',
    icon_type="(props: IconProps) => JSX.Element",
    props_import='import type { ComponentProps } from "react";',
    props_type='ComponentProps<"svg">',
    forward_ref_source="react",
    ref_type_import=(
        'import type { ComponentProps, ForwardRefExoticComponent, RefAttributes } from "react";'
    ),
    ref_icon_type="ForwardRefExoticComponent<IconProps & RefAttributes<SVGSVGElement>>",
)

PREACT = Dialect(
    name="preact",
    label="Preact",
    camel_case_attributes=True,
    type_import='import type { JSX } from "preact";',
    icon_type="(props: IconProps) => JSX.Element",
    props_import='import type { JSX } from "preact";',
    props_type="JSX.SVGAttributes<SVGSVGElement>",
    forward_ref_source="preact/compat",
    ref_type_import=(
        'import type { JSX } from "preact";\n'
        'import type { ForwardRefExoticComponent, RefAttributes } from "preact/compat";'
    ),
    ref_icon_type="ForwardRefExoticComponent<IconProps & RefAttributes<SVGSVGElement>>",
)

# Solid accepts native kebab-case attributes and passes refs as props
SOLID = Dialect(
    name="solid",
    label="Solid",
    camel_case_attributes=False,
    type_import='import type { ComponentProps, JSX } from "solid-js";',
    icon_type="(props: IconProps) => JSX.Element",
    props_import='import type { ComponentProps } from "solid-js";',
    props_type='ComponentProps<"svg">',
)

DIALECTS: dict[str, Dialect] = {d.name: d for d in (REACT, PREACT, SOLID)}


def get_dialect(dialect: "Dialect | str") -> Dialect:
    """Resolve a dialect name to its descriptor.

    Raises:
        UnsupportedDialectError: If no descriptor exists for the name.
    """
    if isinstance(dialect, Dialect):
        return dialect
    try:
        return DIALECTS[dialect]
    except KeyError:
        raise UnsupportedDialectError(dialect) from None
