"""Main server start-up script.

Loads ``.env`` via :func:`dotenv.load_dotenv`, builds the application with
:func:`expenses_api.create_app`, and runs the Flask development server when
executed directly. Gunicorn imports ``flask_app:app``.
"""

from __future__ import annotations

import os
from typing import Final

from dotenv import load_dotenv

load_dotenv()

from expenses_api import create_app  # noqa: E402  # Loaded after dotenv for environment values

DEBUG_FLAGS: Final[dict[str, bool]] = {
    **dict.fromkeys(("1", "true", "yes", "on"), True),
    **dict.fromkeys(("0", "false", "no", "off"), False),
}


def resolve_debug_flag(env_var: str = "FLASK_DEBUG") -> bool:
    """Read ``env_var`` as a boolean; unset or unknown values mean ``False``."""

    return DEBUG_FLAGS.get(os.getenv(env_var, "").strip().lower(), False)


app = create_app()
app.config["DEBUG"] = resolve_debug_flag()


if __name__ == "__main__":
    app.run(debug=app.debug, host="0.0.0.0", port=int(os.getenv("PORT", "8080")))
