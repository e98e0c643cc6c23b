"""Plugin system — pluggy hooks for extra actions and run observers."""

import pluggy

hookimpl = pluggy.HookimplMarker("repostress")
