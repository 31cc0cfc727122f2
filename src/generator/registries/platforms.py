"""Target platform profiles.

A PlatformProfile is selected once per run and carries everything that
differs between targets: file layout, element mapping, runtime imports,
style emission table and runtime style merging. The code generator itself
stays platform-agnostic.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from src.generator.registries.style_emitters import (
    CROSS_PLATFORM_STYLE_EMITTERS,
    WEB_STYLE_EMITTERS,
    StyleEmitter,
)
from src.generator.tree import Platform

GLOBAL_STYLESHEET_PATH = "styles/global.css"

_TEXT_TAGS = ("span", "p", "h1", "h2", "h3", "h4", "h5", "h6", "label", "strong", "em",
              "small", "a", "b", "i")
_BLOCK_TAGS = ("div", "section", "article", "header", "footer", "main", "nav", "aside",
               "form", "ul", "ol", "li")

CROSS_PLATFORM_ELEMENTS: dict[str, str] = {
    **{tag: "View" for tag in _BLOCK_TAGS},
    **{tag: "Text" for tag in _TEXT_TAGS},
    "img": "Image",
    "button": "Pressable",
    "input": "TextInput",
    "textarea": "TextInput",
}

NATIVE_COMPONENTS = frozenset(
    {
        "ActivityIndicator",
        "FlatList",
        "Image",
        "Modal",
        "Pressable",
        "SafeAreaView",
        "ScrollView",
        "Switch",
        "Text",
        "TextInput",
        "TouchableOpacity",
        "View",
    }
)

CROSS_PLATFORM_STYLE_HELPERS = """\
export function isFormat(name) {
  const predicate = styleFormats[name];
  if (!predicate) {
    return false;
  }
  const { width, height } = Dimensions.get('window');
  if (predicate.minWidth !== undefined && width < predicate.minWidth) {
    return false;
  }
  if (predicate.maxWidth !== undefined && width > predicate.maxWidth) {
    return false;
  }
  if (predicate.minHeight !== undefined && height < predicate.minHeight) {
    return false;
  }
  if (predicate.maxHeight !== undefined && height > predicate.maxHeight) {
    return false;
  }
  if (predicate.orientation !== undefined) {
    return predicate.orientation === (width > height ? 'landscape' : 'portrait');
  }
  return true;
}

export function mergeStyles(...styles) {
  return StyleSheet.flatten(styles.filter(Boolean));
}
"""


@dataclass(frozen=True)
class PlatformProfile:
    """Per-platform emission table.

    Attributes:
        platform: Target platform
        source_extension: Extension of generated component files
        style_module_path: Path of the per-app style module artifact
        style_emitters: Style entry kind to emitter
        element_map: Native tag to platform element
        native_source: Module providing native elements, if any
        uses_class_names: Whether elements reference stylesheet classes
        helper_source: Module exporting runtime style helpers, relative to components/
    """

    platform: Platform
    source_extension: str
    style_module_path: str
    style_emitters: Mapping[str, StyleEmitter]
    element_map: Mapping[str, str] = field(default_factory=dict)
    native_source: str | None = None
    uses_class_names: bool = True
    helper_source: str | None = None

    def element_type(self, node_type: str) -> str:
        return self.element_map.get(node_type, node_type)

    def is_native_import(self, element: str) -> bool:
        return self.native_source is not None and element in NATIVE_COMPONENTS

    def merge_styles(self, fragments: list[str]) -> tuple[str, str | None]:
        """Merge runtime fragments into one style expression.

        Returns the expression and the runtime helper it needs, if any.
        Later fragments override earlier keys.
        """
        if len(fragments) == 1 and fragments[0].startswith("{"):
            return fragments[0], None
        if self.platform == Platform.WEB:
            return "{" + ", ".join(f"...{f}" for f in fragments) + "}", None
        return f"mergeStyles({', '.join(fragments)})", "mergeStyles"

    def component_path(self, name: str) -> str:
        return f"components/{name}{self.source_extension}"

    def entry_path(self) -> str:
        return f"index{self.source_extension}"


# Registry mapping platform to its profile
PLATFORMS: dict[Platform, PlatformProfile] = {
    Platform.WEB: PlatformProfile(
        platform=Platform.WEB,
        source_extension=".jsx",
        style_module_path="styles/app.scss",
        style_emitters=WEB_STYLE_EMITTERS,
    ),
    Platform.CROSS_PLATFORM: PlatformProfile(
        platform=Platform.CROSS_PLATFORM,
        source_extension=".js",
        style_module_path="styles/index.js",
        style_emitters=CROSS_PLATFORM_STYLE_EMITTERS,
        element_map=CROSS_PLATFORM_ELEMENTS,
        native_source="react-native",
        uses_class_names=False,
        helper_source="../styles",
    ),
}


def get_profile(platform: Platform | str) -> PlatformProfile:
    """Look up the profile for a platform.

    Raises:
        ValueError: If the platform is unknown
    """
    return PLATFORMS[Platform(platform)]
