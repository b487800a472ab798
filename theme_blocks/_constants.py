"""Common literal values used across theme_blocks.

Hook names, file suffixes and defaults live here so the coordinator, the
render adapter, and tests import the same values without drifting. Intended
for internal use within the theme_blocks package.

Examples
--------
>>> from theme_blocks import _constants
>>> _constants.REGISTER_BLOCK_HOOK.format(name="hero_banner")
'theme_blocks/register_block/hero_banner'
>>> _constants.RENDER_BLOCK_HOOK
'theme_blocks/render_block'
"""

DEFAULT_DIRECTORIES = ("views/blocks",)
DEFAULT_NAMESPACE = "acf"
DEFAULT_CATEGORY = "theme"
DEFAULT_CATEGORY_TITLE = "Theme"
DEFAULT_CAPABILITY = "manage_options"

CONFIG_SUFFIX = "yml"
TEMPLATE_SUFFIX = "twig"
PREVIEW_SUFFIX = "jpg"

DIRECTORIES_HOOK = "theme_blocks/directories"
RENDER_BLOCK_HOOK = "theme_blocks/render_block"
RENDER_BLOCK_NAMED_HOOK = "theme_blocks/render_block/{name}"
PREVIEW_DATA_HOOK = "theme_blocks/preview_data"
PREVIEW_DATA_NAMED_HOOK = "theme_blocks/preview_data/{name}"
REGISTER_BLOCK_HOOK = "theme_blocks/register_block/{name}"
BLOCK_CATEGORIES_HOOK = "block_categories"

INIT_ACTION = "init"
ADMIN_MENU_ACTION = "admin_menu"
ADMIN_NOTICES_ACTION = "admin_notices"

INSERTER_PREVIEW_QUERY = "inserter-preview"
DASHBOARD_SLUG = "theme-blocks"
