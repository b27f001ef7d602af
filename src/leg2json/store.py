"""SQLite store for parsed acts with full-text search."""

from __future__ import annotations

import logging
import re
import sqlite3
from pathlib import Path
from typing import Any, Dict, List, Optional

from leg2json.models import ParsedAct

logger = logging.getLogger(__name__)

_fts_token = re.compile(r"\w+", re.UNICODE)

SCHEMA = """
CREATE TABLE IF NOT EXISTS legal_documents (
    id TEXT PRIMARY KEY,
    type TEXT NOT NULL,
    title TEXT NOT NULL,
    title_en TEXT,
    short_name TEXT,
    status TEXT NOT NULL,
    issued_date TEXT,
    in_force_date TEXT,
    url TEXT,
    description TEXT
);

CREATE TABLE IF NOT EXISTS legal_provisions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    document_id TEXT NOT NULL REFERENCES legal_documents(id),
    provision_ref TEXT NOT NULL,
    chapter TEXT,
    section TEXT NOT NULL,
    title TEXT,
    content TEXT NOT NULL,
    position INTEGER NOT NULL,
    UNIQUE (document_id, provision_ref)
);

CREATE INDEX IF NOT EXISTS idx_provisions_doc_section
ON legal_provisions(document_id, section);

CREATE TABLE IF NOT EXISTS definitions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    document_id TEXT NOT NULL REFERENCES legal_documents(id),
    term TEXT NOT NULL,
    definition TEXT NOT NULL,
    source_provision TEXT
);

CREATE INDEX IF NOT EXISTS idx_definitions_doc ON definitions(document_id);

CREATE VIRTUAL TABLE IF NOT EXISTS provisions_fts USING fts5(
    content, title,
    content='legal_provisions', content_rowid='id'
);

CREATE VIRTUAL TABLE IF NOT EXISTS definitions_fts USING fts5(
    term, definition,
    content='definitions', content_rowid='id'
);
"""

EU_REFERENCES_SCHEMA = """
CREATE TABLE IF NOT EXISTS eu_references (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    document_id TEXT NOT NULL REFERENCES legal_documents(id),
    provision_ref TEXT,
    eu_document_id TEXT NOT NULL,
    reference_type TEXT NOT NULL,
    implementation_status TEXT,
    is_primary_implementation INTEGER NOT NULL DEFAULT 0
);

CREATE INDEX IF NOT EXISTS idx_eu_references_eu_doc ON eu_references(eu_document_id);
"""


def build_fts_query(query: str) -> str:
    """Quote each word of free text so FTS5 operators in user input are inert."""
    tokens = _fts_token.findall(query or "")
    return " ".join(f'"{t}"' for t in tokens)


class LegislationStore:
    """SQLite-backed store of parsed acts.

    ``eu_references`` is optional; lookups against it return nothing when the
    table is missing.
    """

    def __init__(self, path: str | Path = ":memory:", with_eu_references: bool = False):
        self.path = str(path)
        self.conn = sqlite3.connect(self.path)
        self.conn.row_factory = sqlite3.Row
        self._init_schema(with_eu_references)

    def _init_schema(self, with_eu_references: bool) -> None:
        with self.conn:
            self.conn.executescript(SCHEMA)
            if with_eu_references:
                self.conn.executescript(EU_REFERENCES_SCHEMA)

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> "LegislationStore":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def has_table(self, name: str) -> bool:
        row = self.conn.execute(
            "SELECT 1 FROM sqlite_master WHERE type IN ('table', 'view') AND name = ?", (name,)
        ).fetchone()
        return row is not None

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def _delete_document(self, document_id: str) -> None:
        for table, fts, cols in (
            ("legal_provisions", "provisions_fts", "content, title"),
            ("definitions", "definitions_fts", "term, definition"),
        ):
            # External-content FTS tables need explicit 'delete' rows
            self.conn.execute(
                f"INSERT INTO {fts}({fts}, rowid, {cols}) "
                f"SELECT 'delete', id, {cols} FROM {table} WHERE document_id = ?",
                (document_id,),
            )
            self.conn.execute(f"DELETE FROM {table} WHERE document_id = ?", (document_id,))
        if self.has_table("eu_references"):
            self.conn.execute("DELETE FROM eu_references WHERE document_id = ?", (document_id,))
        self.conn.execute("DELETE FROM legal_documents WHERE id = ?", (document_id,))

    def write_act(self, act: ParsedAct) -> None:
        """Insert or replace an act with all its provisions and definitions."""
        with self.conn:
            self._delete_document(act.id)
            self.conn.execute(
                "INSERT INTO legal_documents "
                "(id, type, title, title_en, short_name, status, issued_date, in_force_date, url, description) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    act.id,
                    act.type,
                    act.title,
                    act.title_in_source_language,
                    act.short_name,
                    act.status,
                    act.issued_date,
                    act.in_force_date,
                    act.source_url,
                    act.description,
                ),
            )
            for position, p in enumerate(act.provisions):
                cur = self.conn.execute(
                    "INSERT INTO legal_provisions "
                    "(document_id, provision_ref, chapter, section, title, content, position) "
                    "VALUES (?, ?, ?, ?, ?, ?, ?)",
                    (act.id, p.provision_ref, p.chapter, p.section, p.title, p.content, position),
                )
                self.conn.execute(
                    "INSERT INTO provisions_fts(rowid, content, title) VALUES (?, ?, ?)",
                    (cur.lastrowid, p.content, p.title),
                )
            for d in act.definitions:
                cur = self.conn.execute(
                    "INSERT INTO definitions (document_id, term, definition, source_provision) "
                    "VALUES (?, ?, ?, ?)",
                    (act.id, d.term, d.definition, d.source_provision),
                )
                self.conn.execute(
                    "INSERT INTO definitions_fts(rowid, term, definition) VALUES (?, ?, ?)",
                    (cur.lastrowid, d.term, d.definition),
                )
        logger.info(f"Stored {act.id}: {len(act.provisions)} provisions, {len(act.definitions)} definitions")

    def add_eu_reference(
        self,
        document_id: str,
        eu_document_id: str,
        reference_type: str,
        *,
        provision_ref: Optional[str] = None,
        implementation_status: Optional[str] = None,
        is_primary: bool = False,
    ) -> None:
        """Record that an act references an EU instrument."""
        if not self.has_table("eu_references"):
            with self.conn:
                self.conn.executescript(EU_REFERENCES_SCHEMA)
        with self.conn:
            self.conn.execute(
                "INSERT INTO eu_references "
                "(document_id, provision_ref, eu_document_id, reference_type, "
                "implementation_status, is_primary_implementation) VALUES (?, ?, ?, ?, ?, ?)",
                (document_id, provision_ref, eu_document_id, reference_type,
                 implementation_status, int(is_primary)),
            )

    # ------------------------------------------------------------------
    # Read-only queries
    # ------------------------------------------------------------------

    def get_provision(self, document_id: str, section: str) -> Optional[Dict[str, Any]]:
        """Fetch one provision by section number ('6') or reference ('s6')."""
        ref = section if section.startswith("s") else f"s{section}"
        row = self.conn.execute(
            "SELECT document_id, provision_ref, chapter, section, title, content "
            "FROM legal_provisions WHERE document_id = ? AND provision_ref = ?",
            (document_id, ref),
        ).fetchone()
        return dict(row) if row else None

    def search_legislation(
        self,
        query: str,
        document_id: Optional[str] = None,
        status: Optional[str] = None,
        limit: int = 10,
    ) -> List[Dict[str, Any]]:
        """Full-text search over provision content and titles."""
        fts_query = build_fts_query(query)
        if not fts_query:
            return []

        sql = (
            "SELECT lp.document_id, ld.title AS document_title, lp.provision_ref, lp.chapter, "
            "lp.section, lp.title, snippet(provisions_fts, 0, '>>>', '<<<', '...', 32) AS snippet, "
            "bm25(provisions_fts) AS relevance "
            "FROM provisions_fts "
            "JOIN legal_provisions lp ON lp.id = provisions_fts.rowid "
            "JOIN legal_documents ld ON ld.id = lp.document_id "
            "WHERE provisions_fts MATCH ?"
        )
        params: List[Any] = [fts_query]
        if document_id:
            sql += " AND lp.document_id = ?"
            params.append(document_id)
        if status:
            sql += " AND ld.status = ?"
            params.append(status)
        sql += " ORDER BY relevance LIMIT ?"
        params.append(limit)

        return [dict(r) for r in self.conn.execute(sql, params).fetchall()]

    def search_definitions(self, query: str, limit: int = 10) -> List[Dict[str, Any]]:
        """Full-text search over defined terms and their definitions."""
        fts_query = build_fts_query(query)
        if not fts_query:
            return []
        rows = self.conn.execute(
            "SELECT d.document_id, d.term, d.definition, d.source_provision "
            "FROM definitions_fts JOIN definitions d ON d.id = definitions_fts.rowid "
            "WHERE definitions_fts MATCH ? ORDER BY bm25(definitions_fts) LIMIT ?",
            (fts_query, limit),
        ).fetchall()
        return [dict(r) for r in rows]

    def list_documents(self, status: Optional[str] = None) -> List[Dict[str, Any]]:
        sql = (
            "SELECT ld.id, ld.title, ld.status, ld.issued_date, ld.in_force_date, ld.url, "
            "COUNT(lp.id) AS provision_count "
            "FROM legal_documents ld LEFT JOIN legal_provisions lp ON lp.document_id = ld.id"
        )
        params: List[Any] = []
        if status:
            sql += " WHERE ld.status = ?"
            params.append(status)
        sql += " GROUP BY ld.id ORDER BY ld.title"
        return [dict(r) for r in self.conn.execute(sql, params).fetchall()]

    def get_structure(self, document_id: str) -> List[Dict[str, Any]]:
        """Provisions grouped by chapter, both in document order."""
        rows = self.conn.execute(
            "SELECT chapter, provision_ref, section, title FROM legal_provisions "
            "WHERE document_id = ? ORDER BY position",
            (document_id,),
        ).fetchall()

        groups: Dict[Optional[str], List[Dict[str, Any]]] = {}
        for r in rows:
            groups.setdefault(r["chapter"], []).append(
                {"provision_ref": r["provision_ref"], "section": r["section"], "title": r["title"]}
            )
        return [{"chapter": chapter, "provisions": provs} for chapter, provs in groups.items()]

    def get_implementations(
        self,
        eu_document_id: str,
        primary_only: bool = False,
        in_force_only: bool = False,
    ) -> List[Dict[str, Any]]:
        """Acts that reference an EU directive or regulation.

        Returns an empty list on databases built without ``eu_references``.
        """
        if not self.has_table("eu_references"):
            logger.debug("eu_references not available in this database")
            return []

        sql = (
            "SELECT ld.id AS document_id, ld.title AS document_title, ld.status, "
            "er.reference_type, MAX(er.implementation_status) AS implementation_status, "
            "MAX(er.is_primary_implementation) AS is_primary, COUNT(*) AS reference_count "
            "FROM eu_references er JOIN legal_documents ld ON ld.id = er.document_id "
            "WHERE er.eu_document_id = ?"
        )
        params: List[Any] = [eu_document_id]
        if primary_only:
            sql += " AND er.is_primary_implementation = 1"
        if in_force_only:
            sql += " AND ld.status = ?"
            params.append("in_force")
        sql += " GROUP BY ld.id, er.reference_type ORDER BY is_primary DESC, reference_count DESC"

        rows = self.conn.execute(sql, params).fetchall()
        return [{**dict(r), "is_primary": bool(r["is_primary"])} for r in rows]
