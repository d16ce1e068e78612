"""Shared test fixtures."""

import copy
from pathlib import Path
from typing import Any

import pytest

BUTTON_JSX = """\
import React from 'react';
import PropTypes from 'prop-types';

/**
 * @category actions
 * @component button
 * @name Button
 * @description Triggers an action.
 */

/**
 * @component button
 * @section default
 * @name Default
 * @description The standard button.
 * @js <Button>Click</Button>
 * @html <button class="btn">Click</button>
 */

/**
 * @component button
 * @section sizes
 * @name Sizes
 * @variation small
 * @html <button class="btn btn-sm">Small</button>
 */
export const Button = ({ size, disabled, label }) => null;

Button.propTypes = {
  /**
   * @prop Size of the button | 'md'
   */
  size: PropTypes.oneOf([
    'sm',
    'md',
  ]),
  /**
   * @prop Disables the button, greying it out | false
   */
  disabled: PropTypes.bool,
  /**
   * @prop Text shown on the button
   */
  label: PropTypes.string.isRequired,
};
"""

CARD_SCSS = """\
// @component card
// @section default
// @name Default card
// @html <div class="card"></div>
.card {
  padding: 1rem;
}

/**
 * @component card
 * @section default
 * @scss .card { padding: 2rem; }
 */
"""

NAVIGATION: dict[str, Any] = {
    "overview": {"name": "Overview", "children": []},
    "actions": {
        "name": "Actions",
        "children": [
            {
                "component": "button",
                "name": "Button (nav)",
                "sections": [
                    {"section": "sizes", "name": "Sizes nav"},
                    {"section": "default", "name": "Default nav", "description": "nav desc"},
                    {"section": "loading", "name": "Loading"},
                ],
            },
            {
                "component": "icon-button",
                "name": "Icon button",
                "sections": [{"section": "default", "name": "Default"}],
            },
        ],
    },
    "components": {
        "name": "Components",
        "children": [{"component": "card", "sections": [{"section": "default", "core": True}]}],
    },
    "patterns": {
        "name": "Patterns",
        "children": [
            {"component": "form", "sections": [{"section": "default", "name": "Default"}]}
        ],
    },
}


@pytest.fixture
def navigation() -> dict[str, Any]:
    """A fresh copy of the navigation template."""
    return copy.deepcopy(NAVIGATION)


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Return a directory holding the annotated Button and Card sources."""
    src = tmp_path / "src"
    src.mkdir()
    (src / "Button.jsx").write_text(BUTTON_JSX)
    (src / "card.scss").write_text(CARD_SCSS)
    return src
