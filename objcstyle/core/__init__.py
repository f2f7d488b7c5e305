"""
Core Infrastructure for objcstyle.

Architecture Position
---------------------
    CLI (outermost)
      └── **Core** (innermost - you are here)
            ├── linting     Tokenizer, declaration extractor, rules, reports
            ├── config      Dataclass configuration with YAML persistence
            ├── logging     Structured logging with context fields
            └── exceptions  Error hierarchy with "why" and "how to fix"

The Core layer has no dependency on the CLI. Library code raises exceptions
and logs; it never prints to the terminal.
"""
