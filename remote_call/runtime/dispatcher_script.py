"""Generate the page-side dispatcher that answers call envelopes."""

import json
import logging

logger = logging.getLogger(__name__)

DISPATCHER_NAME = "__remoteCall"


def generate_dispatcher_script(
    identifiers: list[str] | None = None,
    dispatcher_name: str = DISPATCHER_NAME,
) -> str:
    """Generate JavaScript installing a call dispatcher on window.

    The dispatcher takes a request envelope, calls the global function named
    by its identifier and answers with a response envelope. Functions must be
    reachable on globalThis (classic script globals, or assigned explicitly).

    Args:
        identifiers: Identifiers the dispatcher may call; None allows any global function
        dispatcher_name: Property name the dispatcher is installed under

    Returns:
        JavaScript code that can be injected into a page
    """
    allowed = "null" if identifiers is None else json.dumps(list(identifiers))
    if identifiers is not None:
        logger.info(f"Generating dispatcher for {len(identifiers)} functions")

    return f"""
(function() {{
  const allowed = {allowed};
  window[{json.dumps(dispatcher_name)}] = async function(request) {{
    const id = request && request.identifier;
    const fn = (allowed === null || allowed.includes(id)) ? globalThis[id] : undefined;
    if (typeof fn !== 'function') {{
      return {{
        status: 'error',
        errorKind: 'not-implemented',
        message: 'Remote call not implemented for function: ' + id,
      }};
    }}
    try {{
      const value = await fn(...(request.arguments || []));
      return {{ status: 'ok', value: value === undefined ? null : value }};
    }} catch (e) {{
      return {{
        status: 'error',
        errorKind: 'remote-exception',
        message: (e && e.message) ? e.message : String(e),
      }};
    }}
  }};
}})();
"""
