"""Constants and enums for the OpenWebIf TV integration."""

from enum import Enum

from homeassistant.const import Platform

DOMAIN = "openwebif_tv"

CONF_DEVICES = "devices"
CONF_NAME = "name"
CONF_HOST = "host"
CONF_PORT = "port"
CONF_AUTH = "auth"
CONF_USERNAME = "username"
CONF_PASSWORD = "password"
CONF_MANUFACTURER = "manufacturer"
CONF_MODEL = "model"
CONF_SERIAL_NUMBER = "serial_number"
CONF_FIRMWARE_REVISION = "firmware_revision"
CONF_VOLUME_CONTROL = "volume_control"
CONF_SWITCH_INFO_MENU = "switch_info_menu"
CONF_CHANNELS = "channels"
CONF_REFERENCE = "reference"

DEFAULT_NAME = "OpenWebIf TV"
DEFAULT_PORT = 80
DEFAULT_POLL_INTERVAL = 3
DEFAULT_TIMEOUT = 10.0
DEFAULT_MANUFACTURER = "Manufacturer"
DEFAULT_MODEL = "Model Name"
DEFAULT_SERIAL_NUMBER = "Serial Number"
DEFAULT_FIRMWARE_REVISION = "Firmware Revision"

PLACEHOLDER_CHANNEL_NAME = "No channels configured"
PLACEHOLDER_CHANNEL_REFERENCE = "No references configured"

CHANNELS_FILE_PREFIX = f"{DOMAIN}.channels_"
CUSTOM_CHANNELS_FILE_PREFIX = f"{DOMAIN}.custom_channels_"

ENDPOINT_SERVICES = "/api/getallservices"
ENDPOINT_DEVICE_INFO = "/api/deviceinfo"
ENDPOINT_STATUS = "/api/statusinfo"
ENDPOINT_POWER_STATE = "/api/powerstate"
ENDPOINT_ZAP = "/api/zap"
ENDPOINT_VOLUME = "/api/vol"
ENDPOINT_REMOTE_CONTROL = "/api/remotecontrol"

POWER_ON_CODE = "4"
POWER_OFF_CODE = "5"

KEY_EXIT = "174"
KEY_MENU = "139"
KEY_INFO = "358"
KEY_VOLUME_UP = "115"
KEY_VOLUME_DOWN = "114"

PLATFORMS = [
    Platform.MEDIA_PLAYER,
    Platform.REMOTE,
    Platform.TEXT,
    Platform.LIGHT,
    Platform.FAN,
]


class VolumeControl(str, Enum):
    """Extra entity used to expose the volume level."""

    def __str__(self) -> str:

        return self.value

    NONE = "none"
    LIGHT = "light"
    FAN = "fan"


class Capability(str, Enum):
    """Device capabilities exposed to Home Assistant."""

    def __str__(self) -> str:

        return self.value

    POWER = "power"
    ACTIVE_INPUT = "active_input"
    VOLUME = "volume"
    MUTE = "mute"
    VOLUME_SELECTOR = "volume_selector"
    REMOTE_KEY = "remote_key"
    INFO_MENU = "info_menu"


class RemoteKey(str, Enum):
    """Supported remote control keys."""

    def __str__(self) -> str:

        return self.value

    REWIND = "rewind"
    FAST_FORWARD = "fast_forward"
    NEXT_TRACK = "next_track"
    PREVIOUS_TRACK = "previous_track"
    ARROW_UP = "arrow_up"
    ARROW_DOWN = "arrow_down"
    ARROW_LEFT = "arrow_left"
    ARROW_RIGHT = "arrow_right"
    SELECT = "select"
    BACK = "back"
    EXIT = "exit"
    PLAY_PAUSE = "play_pause"
    INFORMATION = "information"


# INFORMATION is resolved at send time, it depends on switch_info_menu.
REMOTE_KEY_CODES: dict[RemoteKey, str] = {
    RemoteKey.REWIND: "168",
    RemoteKey.FAST_FORWARD: "159",
    RemoteKey.NEXT_TRACK: "407",
    RemoteKey.PREVIOUS_TRACK: "412",
    RemoteKey.ARROW_UP: "103",
    RemoteKey.ARROW_DOWN: "108",
    RemoteKey.ARROW_LEFT: "105",
    RemoteKey.ARROW_RIGHT: "106",
    RemoteKey.SELECT: "352",
    RemoteKey.BACK: KEY_EXIT,
    RemoteKey.EXIT: KEY_EXIT,
    RemoteKey.PLAY_PAUSE: "164",
}

REMOTE_KEYS = [key.value for key in RemoteKey]

COMMAND_INFO_MENU_SHOW = "info_menu_show"
COMMAND_INFO_MENU_HIDE = "info_menu_hide"
COMMAND_VOLUME_UP = "volume_up"
COMMAND_VOLUME_DOWN = "volume_down"

REMOTE_COMMANDS = REMOTE_KEYS + [
    COMMAND_INFO_MENU_SHOW,
    COMMAND_INFO_MENU_HIDE,
    COMMAND_VOLUME_UP,
    COMMAND_VOLUME_DOWN,
]
