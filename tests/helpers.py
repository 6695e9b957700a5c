"""Test helpers: fake parsing API and document builders."""
import io
import json

import httpx
from docx import Document


def completion_body(fields: dict) -> dict:
    """Envelope the parsing API returns for a successful completion."""
    return {"choices": [{"text": json.dumps(fields)}]}


def docx_bytes(paragraphs, tables=()) -> bytes:
    """
    Build a DOCX where each paragraph is a list of run texts.

    Each table is a list of rows, each row a list of cell texts.
    """
    doc = Document()
    for runs in paragraphs:
        para = doc.add_paragraph()
        for run_text in runs:
            para.add_run(run_text)
    for rows in tables:
        table = doc.add_table(rows=len(rows), cols=len(rows[0]))
        for row, cell_texts in zip(table.rows, rows):
            for cell, cell_text in zip(row.cells, cell_texts):
                cell.text = cell_text
    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


class FakeParserAPI:
    """
    httpx transport handler standing in for the remote completions API.

    Queue responses with reply() / reply_fields() / fail_with();
    every request is kept in `requests`.
    """

    def __init__(self):
        self.requests = []
        self.responses = []

    def reply(self, status_code: int = 200, json_body=None, text_body: str = None):
        if json_body is not None:
            self.responses.append(httpx.Response(status_code, json=json_body))
        else:
            self.responses.append(httpx.Response(status_code, text=text_body or ""))
        return self

    def reply_fields(self, **fields):
        return self.reply(json_body=completion_body(fields))

    def fail_with(self, exc: Exception):
        self.responses.append(exc)
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError("Unexpected call to the parsing API")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def calls(self) -> int:
        return len(self.requests)

    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)
