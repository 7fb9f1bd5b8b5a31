"""Translated captions for the user interface.

Bundles are plain dictionaries keyed by dotted names. A missing bundle or key
is a configuration fault the application cannot recover from.
"""

from __future__ import annotations

from .exceptions import TranslationUnavailableError

DEFAULT_LANGUAGE = "en"

BUNDLES: dict[str, dict[str, str]] = {
    "en": {
        "app.title": "Simple Task List",
        "filter.done": "Show done tasks",
        "filter.context.all": "All contexts",
        "filter.context.without": "Without context",
        "filter.project.all": "All projects",
        "filter.project.without": "Without project",
        "choice.priority.no": "No priority",
        "choice.priority.done": "Done",
        "column.status": "Done",
        "column.priority": "Priority",
        "column.due": "Due",
        "column.description": "Description",
        "column.context": "Context",
        "column.project": "Project",
        "button.open": "Open",
        "button.save": "Save",
        "button.new": "New",
        "button.edit": "Edit",
        "button.done": "Done",
        "button.delete": "Delete",
        "button.continue": "Continue",
        "button.finish": "Done",
        "button.apply": "Save",
        "button.cancel": "Cancel",
        "button.ok": "OK",
        "button.tag.select": "Select",
        "button.tag.add": "New",
        "button.tag.remove": "Remove",
        "dialog.title.new": "New task",
        "dialog.title.edit": "Edit task",
        "dialog.title.open": "Open task list",
        "dialog.title.save": "Save task list",
        "dialog.filetype.text": "Text files",
        "dialog.filetype.all": "All files",
        "dialog.label.priority": "Priority",
        "dialog.label.creation": "Created",
        "dialog.label.due": "Due",
        "dialog.label.nodate": "No date",
        "dialog.label.description": "Description",
        "dialog.label.context": "Contexts",
        "dialog.label.project": "Projects",
        "dialog.context.select.title": "Select context",
        "dialog.context.select.content": "Context:",
        "dialog.context.new.title": "New context",
        "dialog.context.new.content": "Name of the new context:",
        "dialog.project.select.title": "Select project",
        "dialog.project.select.content": "Project:",
        "dialog.project.new.title": "New project",
        "dialog.project.new.content": "Name of the new project:",
        "error.title": "Error",
        "error.load": "The task list {path} could not be loaded.",
        "error.save": "The task list could not be saved.",
        "dialog.title.delete": "Delete task",
        "confirm.delete": "Delete the selected task?",
        "status.count": "Tasks: {visible} of {total}",
    },
    "de": {
        "app.title": "Einfache Aufgabenliste",
        "filter.done": "Erledigte Aufgaben anzeigen",
        "filter.context.all": "Alle Kontexte",
        "filter.context.without": "Ohne Kontext",
        "filter.project.all": "Alle Projekte",
        "filter.project.without": "Ohne Projekt",
        "choice.priority.no": "Keine Priorität",
        "choice.priority.done": "Erledigt",
        "column.status": "Erledigt",
        "column.priority": "Priorität",
        "column.due": "Fällig",
        "column.description": "Beschreibung",
        "column.context": "Kontext",
        "column.project": "Projekt",
        "button.open": "Öffnen",
        "button.save": "Speichern",
        "button.new": "Neu",
        "button.edit": "Bearbeiten",
        "button.done": "Erledigt",
        "button.delete": "Löschen",
        "button.continue": "Weiter",
        "button.finish": "Fertig",
        "button.apply": "Speichern",
        "button.cancel": "Abbrechen",
        "button.ok": "OK",
        "button.tag.select": "Auswählen",
        "button.tag.add": "Neu",
        "button.tag.remove": "Entfernen",
        "dialog.title.new": "Neue Aufgabe",
        "dialog.title.edit": "Aufgabe bearbeiten",
        "dialog.title.open": "Aufgabenliste öffnen",
        "dialog.title.save": "Aufgabenliste speichern",
        "dialog.filetype.text": "Textdateien",
        "dialog.filetype.all": "Alle Dateien",
        "dialog.label.priority": "Priorität",
        "dialog.label.creation": "Erstellt",
        "dialog.label.due": "Fällig",
        "dialog.label.nodate": "Kein Datum",
        "dialog.label.description": "Beschreibung",
        "dialog.label.context": "Kontexte",
        "dialog.label.project": "Projekte",
        "dialog.context.select.title": "Kontext auswählen",
        "dialog.context.select.content": "Kontext:",
        "dialog.context.new.title": "Neuer Kontext",
        "dialog.context.new.content": "Name des neuen Kontexts:",
        "dialog.project.select.title": "Projekt auswählen",
        "dialog.project.select.content": "Projekt:",
        "dialog.project.new.title": "Neues Projekt",
        "dialog.project.new.content": "Name des neuen Projekts:",
        "error.title": "Fehler",
        "error.load": "Die Aufgabenliste {path} konnte nicht geladen werden.",
        "error.save": "Die Aufgabenliste konnte nicht gespeichert werden.",
        "dialog.title.delete": "Aufgabe löschen",
        "confirm.delete": "Die ausgewählte Aufgabe löschen?",
        "status.count": "Aufgaben: {visible} von {total}",
    },
}

# Keys the application cannot start without.
REQUIRED_KEYS = tuple(BUNDLES[DEFAULT_LANGUAGE])


class Translations:
    def __init__(self, language: str, strings: dict[str, str]):
        self.language = language
        self._strings = dict(strings)

    def __getitem__(self, key: str) -> str:
        try:
            return self._strings[key]
        except KeyError:
            raise TranslationUnavailableError(
                f"Translation key {key!r} missing for language {self.language!r}"
            ) from None

    def format(self, key: str, **values) -> str:
        return self[key].format(**values)

    def __contains__(self, key: object) -> bool:
        return key in self._strings


def load_translations(language: str = DEFAULT_LANGUAGE) -> Translations:
    """Return the bundle for ``language``; every required key must be present."""
    strings = BUNDLES.get(language)
    if strings is None:
        raise TranslationUnavailableError(f"Translation is not available for language {language!r}")
    missing = [key for key in REQUIRED_KEYS if key not in strings]
    if missing:
        raise TranslationUnavailableError(
            f"Translation for language {language!r} lacks keys: {', '.join(missing)}"
        )
    return Translations(language, strings)
