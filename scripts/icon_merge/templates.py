"""Text templates for generated modules.

Uses string formatting for name, markup and type substitution.
"""

# Barrel module written by init (typed)
MODULE_TEMPLATE_TS = """{type_import}

export type IconProps = {props_type};
export type Icon = {icon_type};

export const Icons = {{}} as const satisfies Record<string, Icon>;

export type IconName = never;
"""

# Barrel module written by init (untyped)
MODULE_TEMPLATE_JS = """export const Icons = {};
"""

# Per-icon component file, folder mode
COMPONENT_FILE_TS = """import type {{ IconProps }} from "./types";

export default function {name}(props: IconProps) {{
  return {markup};
}}
"""

COMPONENT_FILE_JS = """export default function {name}(props) {{
  return {markup};
}}
"""

REF_COMPONENT_FILE_TS = """{ref_import}
import type {{ IconProps }} from "./types";

const {name} = forwardRef<SVGSVGElement, IconProps>((props, ref) => {{
  return {markup};
}});

export default {name};
"""

REF_COMPONENT_FILE_JS = """{ref_import}

const {name} = forwardRef((props, ref) => {{
  return {markup};
}});

export default {name};
"""

# Shared prop type, folder mode
TYPES_FILE_TEMPLATE = """{import_statement}

export type IconProps = {props_type};
"""
