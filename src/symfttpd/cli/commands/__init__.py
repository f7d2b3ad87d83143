"""symfttpd subcommands (auto-discovered)."""
