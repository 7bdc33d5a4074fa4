"""
Detection Presets - Named detection settings for common sheet styles
Built-in presets plus user presets stored as YAML files
"""

import logging
import yaml
from pathlib import Path
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field, replace

from ..detection.options import DetectionOptions
from ..errors import PresetError, InvalidOptions

logger = logging.getLogger(__name__)


# ============================================================================
# Preset Data Structures
# ============================================================================

@dataclass
class DetectionPreset:
    """A named set of detection options"""

    name: str
    description: str = ""
    options: DetectionOptions = field(default_factory=DetectionOptions)
    tags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for YAML serialization"""
        data = {
            'name': self.name,
            'description': self.description,
            'options': self.options.to_dict(),
        }
        if self.tags:
            data['tags'] = list(self.tags)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DetectionPreset':
        """Create from dictionary"""
        if 'name' not in data:
            raise PresetError("Preset is missing a name")
        options_data = data.get('options') or {}
        if not isinstance(options_data, dict):
            raise PresetError(f"Options of preset '{data['name']}' must be a mapping")
        try:
            options = DetectionOptions.from_dict(options_data)
        except (InvalidOptions, TypeError) as e:
            raise PresetError(f"Invalid options in preset '{data['name']}': {e}") from e

        tags = data.get('tags') or []
        if not isinstance(tags, list):
            raise PresetError(f"Tags of preset '{data['name']}' must be a list")

        return cls(
            name=data['name'],
            description=data.get('description', ""),
            options=options,
            tags=[str(t) for t in tags],
        )


# ============================================================================
# Built-in Presets
# ============================================================================

BUILTIN_PRESETS: Dict[str, Dict[str, Any]] = {
    "auto_alpha": {
        "name": "auto_alpha",
        "description": "Flood-fill transparent sheets with no frame hints",
        "options": {"mode": "alpha"},
        "tags": ["alpha", "flood_fill"],
    },

    "black_border_grid": {
        "name": "black_border_grid",
        "description": "32x32 cells separated by black borders",
        "options": {
            "mode": "black_border",
            "expected_frame_width": 32,
            "expected_frame_height": 32,
            "expected_frame_count": 4,
        },
        "tags": ["black_border", "grid"],
    },

    "strip_manual": {
        "name": "strip_manual",
        "description": "Four uniform 32x32 frames in a row, no pixel inspection",
        "options": {
            "mode": "manual",
            "expected_frame_width": 32,
            "expected_frame_height": 32,
            "expected_frame_count": 4,
        },
        "tags": ["manual", "strip"],
    },

    "tiny_sprites": {
        "name": "tiny_sprites",
        "description": "Flood-fill that keeps sprites down to 2x2 pixels",
        "options": {"mode": "alpha", "min_width": 2, "min_height": 2},
        "tags": ["alpha", "flood_fill", "small"],
    },
}


# ============================================================================
# Preset Manager
# ============================================================================

class PresetManager:
    """
    Manages loading, saving, and looking up detection presets.
    """

    def __init__(self, user_presets_dir: Optional[Path] = None):
        """
        Initialize preset manager.

        Args:
            user_presets_dir: Directory for user presets (default: ~/.sheet-analyzer/presets)
        """
        self.user_presets_dir = Path(user_presets_dir or Path.home() / '.sheet-analyzer' / 'presets')

        self._builtin: Dict[str, DetectionPreset] = {}
        self._user: Dict[str, DetectionPreset] = {}

        self._load_builtin_presets()
        self._load_user_presets()

    def _load_builtin_presets(self) -> None:
        for name, data in BUILTIN_PRESETS.items():
            self._builtin[name] = DetectionPreset.from_dict(data)

    def _load_user_presets(self) -> None:
        """Load user-defined presets from YAML files"""
        if not self.user_presets_dir.is_dir():
            return

        for yaml_file in sorted(self.user_presets_dir.glob('*.yaml')):
            try:
                with open(yaml_file, 'r') as f:
                    data = yaml.safe_load(f)

                if not isinstance(data, dict):
                    raise PresetError("Top level must be a mapping")

                if 'presets' in data:
                    # Multiple presets in one file
                    presets = data['presets']
                    if not isinstance(presets, dict):
                        raise PresetError("'presets' must be a mapping of name to preset")
                    for name, preset_data in presets.items():
                        if preset_data is None:
                            preset_data = {}
                        if not isinstance(preset_data, dict):
                            raise PresetError(f"Preset '{name}' must be a mapping")
                        preset_data = dict(preset_data)
                        preset_data['name'] = name
                        self._user[name] = DetectionPreset.from_dict(preset_data)
                else:
                    data.setdefault('name', yaml_file.stem)
                    self._user[data['name']] = DetectionPreset.from_dict(data)
            except (yaml.YAMLError, PresetError, OSError) as e:
                logger.warning("Could not load preset file %s: %s", yaml_file, e)

    def get(self, name: str) -> Optional[DetectionPreset]:
        """
        Get a preset by name.
        User presets override built-in presets with same name.
        """
        return self._user.get(name) or self._builtin.get(name)

    def is_builtin(self, name: str) -> bool:
        return name in self._builtin and name not in self._user

    def list_all(self) -> List[str]:
        """List all preset names"""
        return sorted(set(self._builtin) | set(self._user))

    def list_by_tag(self, tag: str) -> List[str]:
        """List presets with a specific tag"""
        matches = []
        for name, preset in {**self._builtin, **self._user}.items():
            if tag.lower() in [t.lower() for t in preset.tags]:
                matches.append(name)
        return sorted(matches)

    def save_preset(self, preset: DetectionPreset, filename: Optional[str] = None) -> Path:
        """
        Save a user preset to YAML file.

        Args:
            preset: The preset to save
            filename: Optional filename (default: preset.name.yaml)

        Returns:
            Path to saved file
        """
        filename = filename or f"{preset.name}.yaml"
        if not filename.endswith('.yaml'):
            filename += '.yaml'

        self.user_presets_dir.mkdir(parents=True, exist_ok=True)
        filepath = self.user_presets_dir / filename

        with open(filepath, 'w') as f:
            yaml.safe_dump(preset.to_dict(), f, default_flow_style=False, sort_keys=False)

        self._user[preset.name] = preset
        return filepath

    def delete_preset(self, name: str) -> bool:
        """
        Delete a user preset.

        Returns:
            True if deleted, False if not found or is builtin
        """
        if name not in self._user:
            return False

        for yaml_file in self.user_presets_dir.glob('*.yaml'):
            if yaml_file.stem == name:
                yaml_file.unlink()
                break

        del self._user[name]
        return True


def apply_overrides(preset: DetectionPreset, **overrides: Any) -> DetectionOptions:
    """
    Preset options with explicit values layered on top.

    None values are ignored so unset CLI flags keep the preset's value.
    """
    values = {k: v for k, v in overrides.items() if v is not None}
    return replace(preset.options, **values)


# ============================================================================
# Global Instance & Convenience Functions
# ============================================================================

_manager: Optional[PresetManager] = None


def get_preset_manager() -> PresetManager:
    """Get or create global preset manager"""
    global _manager
    if _manager is None:
        _manager = PresetManager()
    return _manager


def get_preset(name: str) -> DetectionPreset:
    """Get a preset by name, raising PresetError when unknown"""
    manager = get_preset_manager()
    preset = manager.get(name)
    if preset is None:
        raise PresetError(f"Unknown preset '{name}'. Available: {', '.join(manager.list_all())}")
    return preset

