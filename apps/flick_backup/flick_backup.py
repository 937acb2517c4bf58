"""
Flick Backup - history backup password screen
A Kivy popup that asks for the password used to encrypt a history backup.
The Next button only enables once the password is at least 8 characters,
and pressing Enter on the keyboard does the same as Next.
"""

import os
import sys
import logging

# Kivy config - must be before kivy imports
os.environ.setdefault('KIVY_LOG_LEVEL', 'debug')
# Disable SDL2 touch-to-mouse emulation to prevent double inputs
os.environ['SDL_TOUCH_MOUSE_EVENTS'] = '0'

from kivy.app import App
from kivy.uix.boxlayout import BoxLayout
from kivy.uix.button import Button
from kivy.uix.label import Label
from kivy.uix.popup import Popup
from kivy.uix.textinput import TextInput
from kivy.uix.widget import Widget
from kivy.metrics import dp
from kivy.clock import Clock
from kivy.properties import StringProperty

from .config import BackupPromptConfig
from .prompt import PasswordPrompt
from .shell import request_keyboard, setup_logging

logger = logging.getLogger("flick_backup")

# Light variant, as the backup flow is presented
THEME = {
    'background': (0.97, 0.97, 0.98, 1),
    'bar': (1, 1, 1, 1),
    'text_primary': (0.13, 0.15, 0.16, 1),
    'text_secondary': (0.40, 0.42, 0.45, 1),
    'accent': (0.14, 0.57, 0.95, 1),
    'accent_disabled': (0.14, 0.57, 0.95, 0.35),
    'field': (1, 1, 1, 1),
}

DESCRIPTION = ("The backup will be compressed and encrypted with the password "
               "you set here. It must be at least 8 characters long.")

# Matches ModalView's own close animation
DISMISS_DELAY = 0.15

# Enter is a submit signal; a swallowed Enter must leave the field focused
FIELD_OPTIONS = {
    'multiline': False,
    'text_validate_unfocus': False,
}


class PasswordTextInput(TextInput):
    """Single-line password field that routes every edit through a PasswordPrompt"""

    def __init__(self, prompt, **kwargs):
        self.prompt = prompt
        for key, value in FIELD_OPTIONS.items():
            kwargs.setdefault(key, value)
        super().__init__(**kwargs)
        self.bind(text=self._on_text)
        self.bind(on_text_validate=lambda x: self.prompt.handle_newline_submit())

    def _edit_range(self):
        if self.selection_text:
            start, end = sorted((self.selection_from, self.selection_to))
            return start, end
        cursor = self.cursor_index()
        return cursor, cursor

    def insert_text(self, substring, from_undo=False):
        if self.prompt.is_terminal:
            return
        start, end = self._edit_range()
        if not self.prompt.replace_text(self.text, start, end, substring):
            # Newline: submitted (or swallowed), never shown as text
            return
        return super().insert_text(substring, from_undo=from_undo)

    def _on_text(self, instance, value):
        # Deletions and programmatic changes bypass insert_text
        if self.prompt.is_terminal or value == self.prompt.candidate:
            return
        self.prompt.update_candidate(value)


class BackupPasswordPopup(Popup):
    """Modal password prompt with Cancel / Next in the title bar"""

    def __init__(self, completion, config=None, **kwargs):
        super().__init__(**kwargs)
        self.config = config or BackupPromptConfig()
        self.completion = completion
        self.prompt = PasswordPrompt(self._on_result)

        self.title = ""
        self.separator_height = 0
        self.auto_dismiss = False
        self.size_hint = (1, 1)
        self.background_color = THEME['background']

        layout = BoxLayout(orientation='vertical', spacing=dp(16), padding=[0, 0, 0, dp(16)])

        # Navigation bar
        bar = BoxLayout(orientation='horizontal', size_hint_y=None, height=dp(56))
        self.cancel_btn = Button(
            text="CANCEL",
            font_size=dp(14),
            size_hint_x=0.3,
            background_color=(0, 0, 0, 0),
            color=THEME['text_primary']
        )
        self.cancel_btn.bind(on_release=lambda b: self._on_cancel())
        bar.add_widget(self.cancel_btn)

        bar.add_widget(Label(
            text="SET PASSWORD",
            font_size=dp(16),
            bold=True,
            color=THEME['text_primary']
        ))

        self.next_btn = Button(
            text="NEXT",
            font_size=dp(14),
            bold=True,
            size_hint_x=0.3,
            background_color=(0, 0, 0, 0),
            color=THEME['accent'],
            disabled_color=THEME['accent_disabled'],
            disabled=not self.prompt.is_confirm_enabled()
        )
        self.next_btn.bind(on_release=lambda b: self._on_next())
        bar.add_widget(self.next_btn)
        layout.add_widget(bar)

        self.prompt.bind_confirm_enabled(self._on_confirm_enabled)

        layout.add_widget(Widget())

        self.password_input = PasswordTextInput(
            self.prompt,
            password=self.config.secure_entry,
            font_size=dp(18),
            size_hint_y=None,
            height=dp(56),
            background_color=THEME['field'],
            foreground_color=THEME['text_primary'],
            cursor_color=THEME['accent'],
            hint_text="Password",
            padding=[dp(16), dp(16)]
        )
        self.password_input.bind(focus=self._on_password_focus)
        layout.add_widget(self.password_input)

        description = Label(
            text=DESCRIPTION,
            font_size=dp(14),
            halign='left',
            valign='top',
            color=THEME['text_secondary'],
            size_hint_y=None,
            height=dp(60),
            padding=[dp(16), 0]
        )
        description.bind(size=description.setter('text_size'))
        layout.add_widget(description)

        layout.add_widget(Widget())
        self.content = layout

    def on_open(self):
        logger.info("Backup password prompt opened")
        Clock.schedule_once(lambda dt: self._focus_password_input(), self.config.focus_delay)

    def _focus_password_input(self):
        if self.prompt.is_terminal:
            return
        self.password_input.focus = True
        if self.config.request_keyboard:
            request_keyboard(True)

    def _on_password_focus(self, instance, focused):
        logger.debug(f"Password input focus changed: {focused}")
        if focused and self.config.request_keyboard:
            request_keyboard(True)

    def _on_confirm_enabled(self, enabled):
        self.next_btn.disabled = not enabled

    def _on_next(self):
        if self.prompt.is_terminal or not self.prompt.is_confirm_enabled():
            return
        self.prompt.confirm()

    def _on_cancel(self):
        if self.prompt.is_terminal:
            return
        self.prompt.cancel()

    def _on_result(self, result):
        self.password_input.focus = False
        if self.config.request_keyboard:
            request_keyboard(False)
        self.dismiss()
        # Hand the result over once the popup is gone
        Clock.schedule_once(lambda dt: self.completion(result), DISMISS_DELAY)


def request_password(on_result, config=None):
    """Present the password prompt; on_result gets the PromptResult after dismissal"""
    popup = BackupPasswordPopup(on_result, config=config)
    popup.open()
    return popup


class BackupApp(App):
    """History backup screen hosting the password prompt"""
    status_text = StringProperty("")

    def __init__(self, prompt_config=None, **kwargs):
        super().__init__(**kwargs)
        self.prompt_config = prompt_config or BackupPromptConfig()
        self._popup = None

    def build(self):
        from kivy.core.window import Window
        Window.clearcolor = THEME['background']

        root = BoxLayout(orientation='vertical', spacing=dp(16), padding=[dp(24), dp(48)])
        root.add_widget(Widget())

        root.add_widget(Label(
            text="History Backup",
            font_size=dp(24),
            bold=True,
            color=THEME['text_primary'],
            size_hint_y=None,
            height=dp(40)
        ))

        status_label = Label(
            text=self.status_text,
            font_size=dp(15),
            color=THEME['text_secondary'],
            size_hint_y=None,
            height=dp(28)
        )
        self.bind(status_text=status_label.setter('text'))
        root.add_widget(status_label)

        backup_btn = Button(
            text="Back Up Now",
            font_size=dp(17),
            bold=True,
            size_hint=(None, None),
            size=(dp(300), dp(52)),
            pos_hint={'center_x': 0.5},
            background_color=THEME['accent'],
            color=(1, 1, 1, 1)
        )
        backup_btn.bind(on_release=lambda b: self._on_backup())
        root.add_widget(backup_btn)

        root.add_widget(Widget())
        return root

    def _on_backup(self):
        if self._popup is not None:
            return
        self.status_text = ""
        self._popup = request_password(self._on_password_result, config=self.prompt_config)

    def _on_password_result(self, result):
        self._popup = None
        if result.accepted:
            logger.info("Backup password chosen")
            self.status_text = "Password set. The backup will be encrypted."
        else:
            logger.info("Backup cancelled at password step")
            self.status_text = "Backup cancelled"


def main():
    setup_logging("flick_backup")
    logger.info("=" * 50)
    logger.info("Flick Backup starting...")

    config = BackupPromptConfig.load()
    logging.getLogger().setLevel(getattr(logging, config.log_level, logging.DEBUG))

    try:
        BackupApp(prompt_config=config).run()
    except Exception as e:
        logger.exception(f"App crashed: {e}")
        sys.exit(1)
