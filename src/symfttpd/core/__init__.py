"""Core building blocks: project scanning, rule rendering, server supervision."""
