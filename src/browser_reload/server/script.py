"""Client-side polling script injected into HTML pages."""

from __future__ import annotations

import json

from browser_reload.core.config import DEFAULT_CHECK_PATH

BODY_CLOSE = "</body>"


def reload_script(
    last_reload_time: int,
    check_path: str = DEFAULT_CHECK_PATH,
    interval_ms: int = 1000,
) -> str:
    """Generate the JavaScript that polls *check_path* and reloads on change.

    The page remembers *last_reload_time* (the signal value when the page
    was rendered) and reloads as soon as the endpoint reports anything else.
    Failed polls (network errors, non-2xx statuses, bodies that are not a
    timestamp) are logged to the console and retried on the next tick.
    """
    return (
        f"let lastReloadTime = {int(last_reload_time)};\n"
        "setInterval(async () => {\n"
        "  try {\n"
        f"    const resp = await fetch({json.dumps(check_path)}, {{cache: 'no-store'}});\n"
        "    if (!resp.ok) throw new Error('HTTP ' + resp.status);\n"
        "    const newTime = (await resp.text()).trim();\n"
        "    if (!/^\\d+$/.test(newTime)) throw new Error('Unexpected response: ' + newTime);\n"
        "    if (newTime !== String(lastReloadTime)) {\n"
        "      console.log('Reloading due to file change...');\n"
        "      window.location.reload();\n"
        "    }\n"
        "  } catch (e) {\n"
        "    console.error('Reload check failed:', e);\n"
        "  }\n"
        f"}}, {int(interval_ms)});"
    )


def inject_reload_script(html: str, script: str) -> str:
    """Insert *script* right before the first ``</body>``.

    HTML without a closing body tag is returned unchanged.
    """
    if BODY_CLOSE not in html:
        return html
    return html.replace(BODY_CLOSE, f"<script>\n{script}\n</script>{BODY_CLOSE}", 1)
