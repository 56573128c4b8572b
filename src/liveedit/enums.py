"""Enumeration type definitions"""

from enum import Enum


class ActionTarget(str, Enum):
    """Which half of an editor's state an action addresses"""

    SECTION = "section"
    COMPONENT = "component"
    UNDO = "undo"


class VariantField(str, Enum):
    PRIMARY = "en"
    CONDITION = "includeIf"


class ChoiceType(str, Enum):
    YES_NO = "yesno"
    RADIOS = "radios"
    CHECKBOXES = "checkboxes"


class TargetKind(str, Enum):
    """Update endpoints of the template service"""

    FORM_COMPONENT = "form_component"
    SECTION = "section"
    SECTION_NOTE = "section_note"
    FORM_TEMPLATE = "form_template"
    ATL_DEFAULT_PAGE = "atl_default_page"
    ATL_DEFAULT_PAGE_NOTE = "atl_default_page_note"
    ATL_DEFAULT_PAGE_COMPONENT = "atl_default_page_component"
    ATL_CYA_PAGE = "atl_cya_page"
    ATL_CYA_PAGE_NOTE = "atl_cya_page_note"
    ATL_REPEATER = "atl_repeater"
    ATL_REPEATER_NOTE = "atl_repeater_note"
    ATL_REPEATER_ADD_ANOTHER_QUESTION = "atl_repeater_add_another_question"
    ATL_REPEATER_COMPONENT = "atl_repeater_component"
    ACKNOWLEDGEMENT = "acknowledgement"
    ACKNOWLEDGEMENT_NOTE = "acknowledgement_note"
    ACKNOWLEDGEMENT_COMPONENT = "acknowledgement_component"
    SUMMARY_SECTION = "summary_section"
    SUMMARY_SECTION_NOTE = "summary_section_note"
    SUMMARY_SECTION_COMPONENT = "summary_section_component"
    TASK_SECTION = "task_section"
    SUBMIT_SECTION = "submit_section"


class NoteKind(str, Enum):
    """Where a set of notes is stored"""

    SECTION = "section"
    FORM_TEMPLATE = "form_template"
    SUMMARY_SECTION = "summary_section"
    ACKNOWLEDGEMENT = "acknowledgement"
    ATL_REPEATER = "atl_repeater"
    ATL_DEFAULT_PAGE = "atl_default_page"
    ATL_CYA_PAGE = "atl_cya_page"
