"""
Fixed chunking and batching policy.

These are policy constants, not per-call parameters.
"""

TEXT_CHUNK_SIZE = 1000
TEXT_CHUNK_OVERLAP = 200

CODE_LINES_PER_CHUNK = 100
MAX_REPOSITORY_FILE_BYTES = 500 * 1024
CLONE_TIMEOUT_SECONDS = 90

UPSERT_BATCH_SIZE = 50

RAW_TEXT_LABEL = "Raw Text"

# Directories never descended into during repository traversal
SKIP_DIRS = frozenset({
    "node_modules", ".git", ".next", "dist", "build", "out",
    "__pycache__", ".venv", "venv", ".idea", ".vscode",
    "coverage", ".nyc_output", "vendor", "target",
})

# Source, markup, config and doc files extracted from repositories
CODE_EXTENSIONS = frozenset({
    ".js", ".jsx", ".ts", ".tsx", ".py", ".java", ".go", ".rs", ".rb", ".php",
    ".c", ".cpp", ".h", ".hpp", ".cs", ".swift", ".kt", ".scala",
    ".html", ".css", ".scss", ".sass", ".less",
    ".json", ".yaml", ".yml", ".toml", ".xml",
    ".md", ".mdx", ".txt", ".rst",
    ".sql", ".sh", ".bash", ".zsh", ".ps1",
    ".dockerfile", ".dockerignore", ".gitignore",
    ".env.example", ".eslintrc", ".prettierrc",
})

# Extensionless files worth indexing
CODE_FILENAMES = frozenset({"dockerfile", "makefile"})
