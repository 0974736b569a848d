"""Fuente del texto SQL de la solución.

Por qué en adapters:
- El SQL es un dato externo (constante o archivo), no lógica del Core.
- El Core solo ve `SolutionProvider.get()`; nunca interpreta el texto.
"""

from __future__ import annotations

from pathlib import Path

from core.config import AppSettings
from core.interfaces.collaborators import SolutionProvider

# Pregunta 2 (registro par): empleados más jóvenes por departamento.
YOUNGER_EMPLOYEES_QUERY = """
SELECT
    e1.EMP_ID,
    e1.FIRST_NAME,
    e1.LAST_NAME,
    d.DEPARTMENT_NAME,
    COUNT(e2.EMP_ID) AS YOUNGER_EMPLOYEES_COUNT
FROM EMPLOYEE e1
JOIN DEPARTMENT d
    ON e1.DEPARTMENT = d.DEPARTMENT_ID
LEFT JOIN EMPLOYEE e2
    ON e1.DEPARTMENT = e2.DEPARTMENT
    AND e2.DOB > e1.DOB
GROUP BY
    e1.EMP_ID, e1.FIRST_NAME, e1.LAST_NAME, d.DEPARTMENT_NAME
ORDER BY
    e1.EMP_ID DESC;
""".strip()

YOUNGER_EMPLOYEES_EXPLANATION = """
Counts, for every employee, the colleagues in the same department who are
younger (later date of birth):

1. Self-join EMPLOYEE to compare employees within the same department.
2. LEFT JOIN keeps employees that have no younger colleague (count 0).
3. e2.DOB > e1.DOB selects the younger colleagues.
4. COUNT(e2.EMP_ID) counts them per employee (GROUP BY employee).
5. Results are ordered by EMP_ID descending.
""".strip()


class StaticSolutionProvider(SolutionProvider):
    """Solución embebida en el código."""

    def __init__(
        self,
        query: str = YOUNGER_EMPLOYEES_QUERY,
        explanation: str = YOUNGER_EMPLOYEES_EXPLANATION,
    ) -> None:
        self._query = query
        self._explanation = explanation

    def get(self) -> str:
        return self._query

    def explain(self) -> str:
        return self._explanation


class FileSolutionProvider(SolutionProvider):
    """Lee el SQL de un archivo UTF-8 en cada `get()`.

    Un archivo vacío es un error: nunca se envía una consulta vacía.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    def get(self) -> str:
        text = self._path.read_text(encoding="utf-8").strip()
        if not text:
            raise ValueError(f"solution file is empty: {self._path}")
        return text

    def explain(self) -> str:
        return f"SQL loaded from {self._path}"


def build_solution_provider(settings: AppSettings, path: Path | None = None) -> SolutionProvider:
    """`path` explícito (CLI) > `settings.solution_path` > solución embebida."""

    chosen = path or settings.solution_path
    if chosen is not None:
        return FileSolutionProvider(Path(chosen).expanduser())
    return StaticSolutionProvider()
