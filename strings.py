from typing import Dict

DEFAULT_LANGUAGE = "en"

# Templates use positional %-substitution only
_ENGLISH: Dict[str, str] = {
    # Shared
    "result_message_not_visible": "This view is not visible to the user.",
    "result_message_not_enabled": "This view is not enabled.",
    "result_message_no_screencapture": "A screen capture is required to evaluate this view.",
    "result_message_view_not_within_screencapture":
        "The view bounds %s are not within the screen capture bounds %s; "
        "the reported visibility of this view may be out of date.",
    "result_message_screencapture_data_hidden":
        "The screen capture of this view is hidden by a secure window.",
    "result_message_screencapture_uniform_color":
        "The screen capture of this view is a single uniform color.",
    "result_message_addendum_view_potentially_obscured":
        "This view may be obscured by other on-screen content.",
    "result_message_addendum_against_scrollable_edge":
        "This view may be partially scrolled out of the visible area.",

    # Speakable text composition
    "template_labeled_item": "%s, %s",
    "template_containers_quantity_other": "%s showing %d items",
    "value_listview": "list",
    "value_checked": "checked",
    "value_not_checked": "not checked",
    "value_on": "on",
    "value_off": "off",

    # Touch target size
    "check_title_touch_target_size": "Touch target size",
    "result_message_not_clickable": "This view is not clickable.",
    "result_message_small_touch_target_width_and_height":
        "This item's size is %ddp x %ddp. Consider making this touch target %ddp wide "
        "and %ddp high or larger.",
    "result_message_small_touch_target_height":
        "This item's height is %ddp. Consider making the height of this touch target "
        "%ddp or larger.",
    "result_message_small_touch_target_width":
        "This item's width is %ddp. Consider making the width of this touch target "
        "%ddp or larger.",
    "result_message_customized_small_touch_target_width_and_height":
        "This item's size is %ddp x %ddp. Consider making this touch target %ddp wide "
        "and %ddp high or larger, as configured for this run.",
    "result_message_customized_small_touch_target_height":
        "This item's height is %ddp. Consider making the height of this touch target "
        "%ddp or larger, as configured for this run.",
    "result_message_customized_small_touch_target_width":
        "This item's width is %ddp. Consider making the width of this touch target "
        "%ddp or larger, as configured for this run.",
    "result_message_brief_small_touch_target": "Consider making this clickable item larger.",
    "result_message_addendum_touch_delegate_with_hit_rect":
        "A touch delegate with a hit area of %ddp x %ddp was detected for this item.",
    "result_message_addendum_touch_delegate":
        "A touch delegate was detected on an ancestor of this item. If the delegate is "
        "large enough, this may not be an issue.",
    "result_message_addendum_web_touch_target_size":
        "This item is web content; its touch target may be larger than reported.",
    "result_message_addendum_clickable_ancestor":
        "A clickable ancestor of this item may be large enough to receive its touches.",
    "result_message_addendum_clipped_by_ancestor":
        "This item may be clipped by an ancestor. Its unclipped size is %dpx x %dpx.",

    # Text and image contrast
    "check_title_text_contrast": "Text contrast",
    "check_title_image_contrast": "Image contrast",
    "result_message_not_text_view": "This view is not a text view.",
    "result_message_not_imageview": "This view is not an image view.",
    "result_message_textview_empty": "This text view has no text.",
    "result_message_could_not_get_text_color": "The text color of this view is unknown.",
    "result_message_could_not_get_background_color":
        "The background color of this view is unknown.",
    "result_message_text_must_be_opaque": "Text color must be fully opaque.",
    "result_message_background_must_be_opaque": "Background color must be fully opaque.",
    "result_message_addendum_opacity_description": "Its current opacity is %.2f%%.",
    "result_message_textview_contrast_not_sufficient":
        "The item's text contrast ratio is %.2f. This ratio is based on a text color of "
        "#%06X and background color of #%06X. Consider increasing this item's text "
        "contrast ratio to %.2f or greater.",
    "result_message_customized_textview_contrast_not_sufficient":
        "The item's text contrast ratio is %.2f. This ratio is based on a text color of "
        "#%06X and background color of #%06X. Consider increasing this item's text "
        "contrast ratio to %.2f or greater, as configured for this run.",
    "result_message_textview_heuristic_contrast_not_sufficient":
        "The item's text contrast ratio is %.2f. This ratio is based on an estimated "
        "foreground color of #%06X and an estimated background color of #%06X. Consider "
        "increasing this ratio to %.2f or greater for small text, or %.2f or greater for "
        "large text.",
    "result_message_textview_heuristic_contrast_not_sufficient_when_text_size_available":
        "The item's text contrast ratio is %.2f. This ratio is based on an estimated "
        "foreground color of #%06X and an estimated background color of #%06X. Consider "
        "increasing this ratio to %.2f or greater.",
    "result_message_textview_heuristic_customized_contrast_not_sufficient":
        "The item's text contrast ratio is %.2f. This ratio is based on an estimated "
        "foreground color of #%06X and an estimated background color of #%06X. Consider "
        "increasing this ratio to %.2f or greater, as configured for this run.",
    "result_message_brief_text_contrast_not_sufficient":
        "Consider increasing this item's text contrast ratio.",
    "result_message_image_contrast_not_sufficient":
        "The image's contrast ratio is %.2f. Consider increasing it to %.2f or greater. "
        "This ratio is based on an estimated foreground color of #%06X and an estimated "
        "background color of #%06X.",
    "result_message_image_customized_contrast_not_sufficient":
        "The image's contrast ratio is %.2f. Consider increasing it to %.2f or greater, "
        "as configured for this run. This ratio is based on an estimated foreground color "
        "of #%06X and an estimated background color of #%06X.",
    "result_message_brief_image_contrast_not_sufficient":
        "Consider increasing the contrast ratio of this image.",

    # Speakable text
    "check_title_speakable_text_present": "Item label",
    "check_title_duplicate_speakable_text": "Duplicate item descriptions",
    "result_message_not_important_for_accessibility":
        "This view is not important for accessibility.",
    "result_message_should_not_focus": "This view would not be focused by a screen reader.",
    "result_message_missing_speakable_text":
        "This item may not have a label readable by screen readers.",
    "result_message_web_content":
        "This web view has no children, so its content cannot be evaluated.",
    "result_message_same_speakable_text":
        "This %s item's speakable text: \"%s\" is identical to that of %d other item(s).",
    "result_message_speakable_text": "This %s item also has speakable text: \"%s\".",
    "result_message_brief_same_speakable_text":
        "This item's speakable text is identical to that of other items.",
    # Fix suggestions
    "suggestion_set_view_attribute": "Set the view attribute %s to %s.",
    "suggestion_set_view_attribute_with_an_non_empty_string":
        "Set the view attribute %s to a non-empty string.",

    "clickable": "clickable",
    "non_clickable": "non-clickable",
}

_CATALOGS: Dict[str, Dict[str, str]] = {
    DEFAULT_LANGUAGE: _ENGLISH,
}


def _language_of(locale: str) -> str:
    return locale.replace("-", "_").split("_")[0].lower() if locale else DEFAULT_LANGUAGE


def get_string(locale: str, key: str) -> str:
    """
    Look up a message template. Locales without a catalog fall back to English;
    an unknown key raises KeyError.
    """
    catalog = _CATALOGS.get(_language_of(locale), _CATALOGS[DEFAULT_LANGUAGE])
    return catalog[key]
