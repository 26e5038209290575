# tedit/ui/KeyBinder.py
"""KeyBinder.py
==================
Description:
-----------------------
The KeyBinder class translates terminal input events into TEDIT editor actions.
It supports the default keybindings, user overrides from the ``[keybindings]``
section of ``config.toml``, named keys (arrows, Home/End, PageUp/PageDown,
function keys) and Ctrl/Alt modifiers.

Main Methods:
1. handle_input: Processes a single key event and dispatches it to the matching editor action.
2. _load_keybindings: Merges default and user keybindings and resolves them to key codes.
3. _decode_keystring: Decodes a key specification ("ctrl+s", "f5", 19) into a key code.
4. _setup_action_map: Builds the key code -> editor method mapping.
5. get_key_input: Reads one key or escape sequence from the terminal.
6. lookup: Reverse lookup from a key specification to the action name.
"""

import curses
import logging
import re
from typing import TYPE_CHECKING, Any, Callable, Optional

from wcwidth import wcswidth

from tedit.utils.logging_config import KEY_LOGGER

if TYPE_CHECKING:
    from tedit.core.Tedit import Tedit


# ==================== KeyBinder Class ====================
class KeyBinder:
    """Class KeyBinder
    ====================
    Maps key codes to editor actions and dispatches input events.

    Attributes:
        editor (Tedit): The curses controller whose methods implement the actions.
        config (dict): Application configuration (only ``keybindings`` is read).
        stdscr: The curses window input is read from.
        keybindings (dict): Action name -> list of key codes or logical key strings.
        action_map (dict): Key code or logical key string -> bound editor method.
    """

    # Keys do NOT include the leading ESC; get_key_input() strips it.
    ESCAPE_SEQUENCE_MAP: dict[str, str] = {
        "[A": "up", "[B": "down", "[C": "right", "[D": "left",
        "OA": "up", "OB": "down", "OC": "right", "OD": "left",
        "[H": "home", "[F": "end", "OH": "home", "OF": "end",
        "[1~": "home", "[4~": "end", "[7~": "home", "[8~": "end",
        "[2~": "insert", "[3~": "delete", "[5~": "pageup", "[6~": "pagedown",
        "OP": "f1", "OQ": "f2", "OR": "f3", "OS": "f4",
        "[11~": "f1", "[12~": "f2", "[13~": "f3", "[14~": "f4",
        "[15~": "f5", "[17~": "f6", "[18~": "f7", "[19~": "f8",
        "[20~": "f9", "[21~": "f10", "[23~": "f11", "[24~": "f12",
    }

    def __init__(self, editor: "Tedit"):
        logging.debug("KeyBinder initialized with editor: %s", editor)
        self.editor = editor
        self.config = editor.config
        self.stdscr = editor.stdscr

        self.keybindings = self._load_keybindings()
        self.action_map = self._setup_action_map()

    def _handle_printable_character(self, key: str | int) -> bool:
        """Inserts a printable character; returns False for anything else."""
        char_to_insert = ""
        if isinstance(key, str) and len(key) == 1:
            if wcswidth(key) > 0:
                char_to_insert = key
        elif isinstance(key, int) and 32 <= key < 0x110000:
            try:
                char_to_insert = chr(key)
            except ValueError:
                logging.warning(f"Invalid ordinal for chr(): {key}. Cannot convert.")
                return False
            if wcswidth(char_to_insert) <= 0:
                char_to_insert = ""

        if char_to_insert:
            logging.debug(f"handle_input: inserting printable character {char_to_insert!r}")
            return self.editor.insert_text(char_to_insert)

        return False

    # ---------------------- Handle Input --------------------
    def handle_input(self, key: str | int) -> bool:
        """Processes a single key event and triggers the corresponding editor action.

        Args:
            key (Union[str, int]): Key code, logical key string ("alt-x") or a
                printable character.

        Returns:
            bool: True if the event changed what is on screen.

        Exceptions raised by an action are caught and logged, and the status
        line reports the failure; they never reach the main loop.
        """
        KEY_LOGGER.debug("key=%r type=%s", key, type(key).__name__)

        original_status = self.editor.status_message
        changed = False
        try:
            if key in self.action_map:
                action = self.action_map[key]
                logging.debug(f"handle_input: Key '{key}' found in action_map. Calling: {action.__name__}")
                if action():
                    changed = True
            elif self._handle_printable_character(key):
                changed = True
            else:
                logging.debug("Unhandled input: %r (type: %s)", key, type(key).__name__)
                self.editor.set_status_message(f"Ignored unhandled input: {key!r}")

            if self.editor.status_message != original_status:
                changed = True
            return changed

        except Exception as e_handler:
            logging.exception("Input handler error.")
            self.editor.set_status_message(f"Input handler error: {str(e_handler)[:50]}")
            return True

    def _load_keybindings(self) -> dict[str, list[int | str]]:
        """Returns action name -> key codes, user config layered over the defaults.

        A user entry replaces the default list for that action; an empty entry
        unbinds it. Entries may be a string, a list, or ``"a|b"`` alternatives.
        """
        default_keybindings: dict[str, list[int | str]] = {
            "save_file": ["ctrl+s", 19],
            "open_file": ["ctrl+o", 15],
            "quit": ["ctrl+q", 17],
            "undo": ["ctrl+z", 26],
            "redo": ["ctrl+y", 25],
            "toggle_highlighting": ["ctrl+t", 20],
            "delete": ["del", curses.KEY_DC],
            "handle_backspace": ["backspace", curses.KEY_BACKSPACE, 8, 127],
            "tab": ["tab", 9],
            "handle_up": ["up", curses.KEY_UP],
            "handle_down": ["down", curses.KEY_DOWN],
            "handle_left": ["left", curses.KEY_LEFT],
            "handle_right": ["right", curses.KEY_RIGHT],
            "handle_home": ["home", curses.KEY_HOME],
            "handle_end": ["end", getattr(curses, "KEY_END", curses.KEY_LL)],
            "handle_page_up": ["pageup", curses.KEY_PPAGE],
            "handle_page_down": ["pagedown", curses.KEY_NPAGE],
        }

        user_keybindings_config: dict[str, object] = self.config.get("keybindings", {})
        parsed_keybindings: dict[str, list[int | str]] = {}

        for action, default_value_spec in default_keybindings.items():
            spec: object = user_keybindings_config.get(action, default_value_spec)

            if not spec and spec != 0:
                logging.debug("Keybinding for action %r is disabled or empty.", action)
                continue

            specs_to_process: list[Any]
            if isinstance(spec, list):
                specs_to_process = spec
            elif isinstance(spec, str) and "|" in spec:
                specs_to_process = [s.strip() for s in spec.split("|")]
            else:
                specs_to_process = [spec]

            key_codes_for_action: list[int | str] = []
            for key_spec_item in specs_to_process:
                try:
                    key_code = self._decode_keystring(key_spec_item)
                except ValueError as e:
                    logging.error(
                        "Error parsing keybinding item %r for action %r: %s. Ignored.",
                        key_spec_item, action, e,
                    )
                    continue
                if key_code not in key_codes_for_action:
                    key_codes_for_action.append(key_code)

            if key_codes_for_action:
                parsed_keybindings[action] = key_codes_for_action
            else:
                logging.warning("No valid key codes found for action %r. It will not be bound.", action)

        for action in user_keybindings_config:
            if action not in default_keybindings:
                logging.warning("Unknown action %r in [keybindings]. Ignored.", action)

        logging.debug("Loaded keybindings (action -> key codes): %s", parsed_keybindings)
        return parsed_keybindings

    def _decode_keystring(self, key_input: str | int) -> int | str:
        """Decodes a key specification into a key code or logical Alt identifier.

        Args:
            key_input: "ctrl+s", "alt+x", "f5", "pageup", a single character,
                or an integer key code (returned as is).

        Raises:
            ValueError: If the key string is empty, unknown or uses an
                unsupported modifier.
        """
        if isinstance(key_input, bool) or not isinstance(key_input, (str, int)):
            raise ValueError(f"Invalid key_input type: {type(key_input)}. Expected str or int.")
        if isinstance(key_input, int):
            return key_input

        s = key_input.strip().lower()
        if not s:
            raise ValueError("Key string cannot be empty.")

        parts = s.split("+")
        if "alt" in parts[:-1] or s.startswith("alt-"):
            base = s[4:] if s.startswith("alt-") else parts[-1]
            return f"alt-{base}"

        named_keys_map: dict[str, int] = {
            "left": curses.KEY_LEFT,
            "right": curses.KEY_RIGHT,
            "up": curses.KEY_UP,
            "down": curses.KEY_DOWN,
            "home": curses.KEY_HOME,
            "end": getattr(curses, "KEY_END", curses.KEY_LL),
            "pageup": curses.KEY_PPAGE,
            "pgup": curses.KEY_PPAGE,
            "pagedown": curses.KEY_NPAGE,
            "pgdn": curses.KEY_NPAGE,
            "delete": curses.KEY_DC,
            "del": curses.KEY_DC,
            "backspace": curses.KEY_BACKSPACE,
            "insert": curses.KEY_IC,
            "tab": 9,
            "enter": curses.KEY_ENTER,
            "return": curses.KEY_ENTER,
            "space": ord(" "),
            "esc": 27,
            "escape": 27,
        }
        named_keys_map.update({f"f{i}": getattr(curses, f"KEY_F{i}", 264 + i) for i in range(1, 13)})

        if s in named_keys_map:
            return named_keys_map[s]

        base_key_str = parts[-1].strip()
        modifiers = set(p.strip() for p in parts[:-1])

        if base_key_str in named_keys_map:
            base_code = named_keys_map[base_key_str]
        elif len(base_key_str) == 1:
            base_code = ord(base_key_str)
        else:
            raise ValueError(f"Unknown base key '{base_key_str}' in '{key_input}'")

        if "ctrl" in modifiers:
            modifiers.remove("ctrl")
            if len(base_key_str) == 1 and "a" <= base_key_str <= "z":
                base_code = ord(base_key_str) - ord("a") + 1
            elif base_key_str == "\\":
                base_code = 28
            elif base_key_str == "]":
                base_code = 29
            else:
                raise ValueError(f"Ctrl cannot be combined with '{base_key_str}'")

        if "shift" in modifiers:
            modifiers.remove("shift")
            if len(base_key_str) == 1 and base_code == ord(base_key_str):
                base_code = ord(base_key_str.upper())

        if modifiers:
            raise ValueError(f"Unknown or unhandled modifiers {sorted(modifiers)} in '{key_input}'")

        return base_code

    def _setup_action_map(self) -> dict[int | str, Callable[..., Any]]:
        """Builds key code -> editor method, starting from the built-in curses keys."""
        action_to_method_map: dict[str, Callable[..., Any]] = {
            "open_file": self.editor.open_file,
            "save_file": self.editor.save_file,
            "quit": self.editor.exit_editor,
            "undo": self.editor.undo,
            "redo": self.editor.redo,
            "toggle_highlighting": self.editor.toggle_highlighting,
            "delete": self.editor.handle_delete,
            "handle_backspace": self.editor.handle_backspace,
            "handle_enter": self.editor.handle_enter,
            "tab": self.editor.handle_tab,
            "handle_up": self.editor.handle_up,
            "handle_down": self.editor.handle_down,
            "handle_left": self.editor.handle_left,
            "handle_right": self.editor.handle_right,
            "handle_home": self.editor.handle_home,
            "handle_end": self.editor.handle_end,
            "handle_page_up": self.editor.handle_page_up,
            "handle_page_down": self.editor.handle_page_down,
        }

        final_key_action_map: dict[int | str, Callable[..., Any]] = {
            curses.KEY_RESIZE: self.editor.handle_resize,
            curses.KEY_MOUSE: self.editor.handle_mouse,
            curses.KEY_ENTER: action_to_method_map["handle_enter"],
            10: action_to_method_map["handle_enter"],  # LF
            13: action_to_method_map["handle_enter"],  # CR
        }

        for action_name, key_code_list in self.keybindings.items():
            method_callable = action_to_method_map.get(action_name)
            if not method_callable:
                logging.warning(f"Action '{action_name}' in keybindings but no corresponding method. Ignored.")
                continue
            for key_code in key_code_list:
                existing = final_key_action_map.get(key_code)
                if existing is not None and existing.__name__ != method_callable.__name__:
                    logging.warning(
                        f"Keybinding for action '{action_name}' (key: {key_code}) is overwriting "
                        f"an existing mapping for method '{existing.__name__}'."
                    )
                final_key_action_map[key_code] = method_callable

        final_map_log_str = {k: v.__name__ for k, v in final_key_action_map.items()}
        logging.debug(f"Final constructed action map: {final_map_log_str}")
        return final_key_action_map

    def get_key_input(self, window: Optional[Any] = None) -> int | str:
        """Reads one key event.

        Returns:
            int | str:
            - a curses key code (int) for special and control keys,
            - a one-character str for text input,
            - "alt-<char>" for Alt/Meta chords,
            - 27 for a lone ESC,
            - curses.ERR on a curses error.
        """
        target = window or self.stdscr
        try:
            ch = target.get_wch()
        except curses.error:
            return curses.ERR

        if isinstance(ch, str):
            if len(ch) == 1 and (ord(ch) < 32 or ord(ch) == 127):
                ch = ord(ch)
            else:
                return ch
        if ch != 27:
            return ch

        # ESC: lone ESC, Alt chord, or an escape sequence
        seq = ""
        target.nodelay(True)
        try:
            while True:
                try:
                    nx = target.getch()
                except curses.error:
                    break
                if nx == curses.ERR:
                    break
                seq += chr(nx) if 0 <= nx <= 255 else f"<{nx}>"
        finally:
            target.nodelay(False)

        if not seq:
            return 27
        if len(seq) == 1 and seq.isprintable():
            return f"alt-{seq.lower()}"

        mapped = self.ESCAPE_SEQUENCE_MAP.get(seq)
        if not mapped:
            cleaned = "".join(re.findall(r"[\[O0-9;~A-Za-z]", seq))
            mapped = self.ESCAPE_SEQUENCE_MAP.get(cleaned)
        if mapped:
            return self._decode_keystring(mapped)

        logging.warning("get_key_input: unknown escape sequence: ESC + %r", seq)
        return 27

    def lookup(self, key_spec: str | int) -> Optional[str]:
        """Returns the action bound to ``key_spec`` or None."""
        try:
            decoded_key = self._decode_keystring(key_spec)
        except ValueError:
            return None
        for action_name, key_list in self.keybindings.items():
            if decoded_key in key_list:
                return action_name
        return None
