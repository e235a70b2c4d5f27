"""
Predefined launch targets offered during onboarding.

Built-in launcher commands can't be started through the extension launch
API; the front-end shows them as guidance only. Store extensions launch
normally when installed.
"""

from models.alias import Alias
from models.event import LaunchTarget


def _alias(alias_id: str, title: str, owner: str, extension: str, command: str, hotkey=None) -> Alias:
    return Alias(
        id=alias_id,
        title=title,
        target=LaunchTarget(owner=owner, extension=extension, command=command),
        suggest_hotkey=hotkey,
    )


BUILTIN_COMMANDS: list[Alias] = [
    # Files & search
    _alias("builtin_file_search", "File Search", "raycast", "builtin", "file-search", "⌘Space F"),
    _alias("builtin_search_menu_items", "Search Menu Items", "raycast", "builtin", "search-menu-items", "⌘⇧/"),
    # Clipboard
    _alias("builtin_clipboard_history", "Clipboard History", "raycast", "builtin", "clipboard-history", "⌥⌘C"),
    # Windows
    _alias("builtin_window_management", "Window Management", "raycast", "builtin", "window-management", "⌃⌥→"),
    # System
    _alias("builtin_quit_all_applications", "Quit All Applications", "raycast", "builtin", "quit-all-apps"),
    _alias("builtin_empty_trash", "Empty Trash", "raycast", "builtin", "empty-trash"),
    _alias("builtin_system_information", "System Information", "raycast", "builtin", "system-info"),
    _alias("builtin_calculator", "Calculator", "raycast", "builtin", "calculator"),
    _alias("builtin_snippets", "Search Snippets", "raycast", "builtin", "search-snippets", "⌥⌘S"),
    _alias("builtin_search_emoji", "Search Emoji & Symbols", "raycast", "builtin", "search-emoji-symbols", "⌘⌃Space"),
]

POPULAR_EXTENSIONS: list[Alias] = [
    # Developer tools
    _alias("ext_github", "GitHub", "raycast", "github", "search-repositories"),
    _alias("ext_gitlab", "GitLab", "raycast", "gitlab", "search-projects"),
    _alias("ext_linear", "Linear", "linear", "linear", "search-issues"),
    _alias("ext_jira", "Jira", "raycast", "jira", "search-issues"),
    # Communication
    _alias("ext_slack", "Slack", "raycast", "slack", "search-messages"),
    _alias("ext_zoom", "Zoom", "raycast", "zoom", "start-meeting"),
    # Productivity
    _alias("ext_notion", "Notion", "notion", "notion", "search-page"),
    _alias("ext_todoist", "Todoist", "doist", "todoist", "search-tasks"),
    _alias("ext_things", "Things", "raycast", "things", "search-todos"),
    # AI & translation
    _alias("ext_ai_commands", "AI Commands", "raycast", "raycast-ai", "ai-commands"),
    _alias("ext_deepl", "DeepL Translate", "raycast", "deepl", "translate"),
    # Utilities
    _alias("ext_brew", "Homebrew", "raycast", "brew", "search"),
    _alias("ext_kill_process", "Kill Process", "raycast", "kill-process", "kill-process"),
    _alias("ext_speedtest", "Speedtest", "raycast", "speedtest", "speedtest"),
    # Design
    _alias("ext_figma", "Figma", "raycast", "figma-files", "search-files"),
    _alias("ext_color_picker", "Color Picker", "raycast", "color-picker", "pick-color"),
]


def predefined_commands() -> list[Alias]:
    return [alias.model_copy(deep=True) for alias in BUILTIN_COMMANDS + POPULAR_EXTENSIONS]


def is_builtin(alias: Alias) -> bool:
    return alias.target.extension == "builtin"
