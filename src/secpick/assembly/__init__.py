"""Assembly collaborators: editable selections and merged PDF output."""

from secpick.assembly.editor import EditableSelection, apply_page_edits, parse_page_spec, selections_from_report
from secpick.assembly.merge import merge_selected

__all__ = ["EditableSelection", "apply_page_edits", "merge_selected", "parse_page_spec", "selections_from_report"]
