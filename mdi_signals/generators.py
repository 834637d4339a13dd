"""
Prototype and locale file generators

Renders the Lua data files (virtual signals and item subgroups) and the
locale .cfg consumed by the game. Output uses four-space indentation, LF line
endings and no trailing newline.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Union

LUA_TAB = '    '


@dataclass(frozen=True)
class IconEntry:
    """One rasterized icon and the subgroup it belongs to"""
    icon_name: str
    subgroup: str


def _lua_table(fields: List[tuple]) -> str:
    lines = [f"{LUA_TAB}{{"]
    body = [f'{LUA_TAB}{LUA_TAB}{key} = "{value}"' for key, value in fields]
    lines.append(',\n'.join(body))
    lines.append(f"{LUA_TAB}}}")
    return '\n'.join(lines)


def _data_extend(tables: List[str]) -> str:
    if not tables:
        return "data:extend({\n})"
    return "data:extend({\n" + ',\n'.join(tables) + "\n})"


def render_signals(entries: Iterable[IconEntry], mod_name: str = 'factorio-mdi-signals',
                   signal_prefix: str = 'signal-') -> str:
    """Render the virtual-signal prototypes"""
    tables = [
        _lua_table([
            ('type', 'virtual-signal'),
            ('name', f"{signal_prefix}{entry.icon_name}"),
            ('icon', f"__{mod_name}__/graphics/signal/{entry.icon_name}.png"),
            ('subgroup', entry.subgroup),
        ])
        for entry in entries
    ]
    return _data_extend(tables)


def render_groups(subgroups: Iterable[str], group_name: str = 'mdi-signals') -> str:
    """Render the item-subgroup prototypes, sorted by name"""
    tables = [
        _lua_table([
            ('type', 'item-subgroup'),
            ('name', subgroup),
            ('group', group_name),
        ])
        for subgroup in sorted(set(subgroups))
    ]
    return _data_extend(tables)


def render_locale(entries: Iterable[IconEntry], group_name: str = 'mdi-signals',
                  group_title: str = 'Material Design Icon Signals',
                  signal_prefix: str = 'signal-') -> str:
    """Render the locale file naming the item group and every signal"""
    lines = [
        '[item-group-name]',
        f"{group_name}={group_title}",
        '[virtual-signal-name]',
    ]
    lines.extend(f"{signal_prefix}{entry.icon_name}={entry.icon_name}" for entry in entries)
    return '\n'.join(lines)


def write_text(path: Union[str, Path], content: str) -> Path:
    """Write UTF-8 text with LF line endings, creating parent directories"""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8', newline='\n') as f:
        f.write(content)
    return path
