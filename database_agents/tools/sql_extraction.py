"""Helpers that pull SQL out of free-form model replies."""

import re
from typing import List, Optional

import sqlparse

# A language tag (sql, sqlite3, text, ...) counts only when the rest of its line is empty
FENCE_TAG = r"(?:[ \t]*[\w+-]*[ \t]*\r?\n)"
FENCED_BLOCK_RE = re.compile(r"```" + FENCE_TAG + r"?(.*?)```", re.DOTALL)
STRAY_FENCE_RE = re.compile(r"```(?:[ \t]*[\w+-]*[ \t]*(?:\r?\n|$))?")
SELECT_QUERY_RE = re.compile(r"(SELECT.*?FROM.*?)(?:;|$)", re.DOTALL | re.IGNORECASE)
TRANSACTION_CONTROL_RE = re.compile(
    r"^(BEGIN|COMMIT|END|ROLLBACK)(\s+TRANSACTION)?\s*;?$",
    re.IGNORECASE,
)


def strip_code_fences(text: str) -> str:
    """Keep only the contents of markdown code blocks, or drop stray fence markers"""
    blocks = FENCED_BLOCK_RE.findall(text)
    if blocks:
        return "\n".join(blocks)
    return STRAY_FENCE_RE.sub("", text)


def extract_sql_statements(schema_text: str) -> List[str]:
    """Split schema text into executable statements, each ending in one ';'.

    Statement order is preserved. Comment-only fragments and transaction
    control statements are dropped since the caller runs its own transaction.
    """
    statements = []
    for statement in sqlparse.split(strip_code_fences(schema_text)):
        statement = sqlparse.format(statement, strip_comments=True).strip().rstrip(";").strip()
        if not statement:
            continue
        if TRANSACTION_CONTROL_RE.match(statement):
            continue
        statements.append(statement + ";")
    return statements


def extract_sql_query(response: str) -> Optional[str]:
    """Extract the SQL query from an agent response.

    Tries the first markdown code block, then the first SELECT ... FROM ... up to
    the terminating ';'. Returns None when neither is found.
    """
    block_match = FENCED_BLOCK_RE.search(response)
    if block_match:
        return block_match.group(1).strip() or None

    select_match = SELECT_QUERY_RE.search(response)
    if select_match:
        return select_match.group(1).strip()

    return None


def first_statement(sql: str) -> str:
    """Return the first statement of a possibly multi-statement SQL string"""
    statements = [statement.strip() for statement in sqlparse.split(sql) if statement.strip()]
    return statements[0] if statements else sql.strip()
