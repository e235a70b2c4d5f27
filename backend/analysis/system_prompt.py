"""
Prompt template for the usage critic.

Only the RAW_LOGS section varies between calls. The ruleset and the output
schema are fixed strings, so identical event slices always produce
byte-identical prompts. Bump RULESET_VERSION whenever RULES changes.
"""

from typing import Sequence, Union

from models.event import InputEvent, LaunchEvent, dump_event

SYSTEM_PROMPT = (
    "You are 'Command Clinic', an expert at optimizing command launcher usage. "
    "Analyze logs and propose actionable improvements."
)

RULESET_VERSION = "1"

RULES = f"""# RULES (v{RULESET_VERSION})
- frequent launch: count(aliasId) >= 10 in the window -> shortcut suggestion
- repeated long input: len >= 20 and same text >= 3 times -> snippet suggestion
- chain: ordered sequence of >= 2 distinct launches (A->B->C) within 10 minutes, repeated >= 2 times -> macro suggestion
- output up to 3 proposals, prioritize chain > frequent > long
- detect frequent keywords in input text that suggest missing tools -> extension hints
- respond ONLY with JSON matching the schema below.

# EXTENSION_DETECTION
- Look for patterns in input text suggesting uninstalled extensions:
  - "JIRA-123" style ticket IDs or "jira" -> Jira extension
  - "LIN-123" style ticket IDs or "linear " -> Linear extension
  - "github.com/" URLs or "gh " commands -> GitHub extension
  - "notion.so/" URLs -> Notion extension
  - "figma.com/" URLs -> Figma extension
  - "slack " or "#channel" markers -> Slack extension"""

OUTPUT_SCHEMA = """# OUTPUT_SCHEMA
{
  "proposals": [
    {
      "type": "shortcut|snippet|macro",
      "title": "string",
      "rationale": "string (max 80 chars)",
      "evidence": {
        "aliases": ["..."],
        "count": 0,
        "time_windows": ["HH:MM-HH:MM UTC"]
      },
      "payload": {
        "shortcut": { "aliasId": "id", "suggestedHotkey": "Alt+Cmd+K" },
        "snippet": { "text": "the repeated text", "alias": "short" },
        "macro": { "sequence": ["AliasA", "AliasB", "AliasC"] }
      },
      "confidence": 0.0
    }
  ],
  "extension_hints": [
    {
      "keyword": "pattern detected",
      "frequency": 5,
      "suggested_search": "search query for the extension store",
      "extension_name": "suggested extension name",
      "description": "why this extension would help"
    }
  ]
}
"payload" holds exactly one key, the one named by "type"."""


def build_prompt(events: Sequence[Union[InputEvent, LaunchEvent]]) -> str:
    """
    Render the user message for one analysis call.

    Events are written one compact JSON object per line, in the order given;
    callers pass an already sorted and limited slice.
    """
    raw_logs = "\n".join(dump_event(event) for event in events)
    return (
        f"# RAW_LOGS (JSON Lines, newest first)\n"
        f"{raw_logs}\n"
        f"\n"
        f"{RULES}\n"
        f"\n"
        f"{OUTPUT_SCHEMA}"
    )
