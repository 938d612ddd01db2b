import pytest

from conftest import FakeApi, build_session, make_status, run, tracking_session
from custom_components.openwebif_tv.api import (
    InvalidChannelError,
    OpenWebIfConnectionError,
)
from custom_components.openwebif_tv.const import Capability, RemoteKey


def _off_session():
    api = FakeApi()
    api.status = make_status(powered=False)
    session = build_session(api)
    run(session.async_poll())
    api.calls.clear()
    return session


def test_power_set_only_when_state_differs() -> None:
    session = tracking_session()

    assert run(session.async_set_power(True)) is False
    assert run(session.async_set_power(False)) is True

    assert session.api.commands() == [("powerstate", "5")]


def test_power_on_is_sent_while_off() -> None:
    session = _off_session()

    assert run(session.async_set_power(True)) is True
    assert session.api.commands() == [("powerstate", "4")]


def test_power_failure_propagates(connection_error) -> None:
    session = tracking_session()
    session.api.command_error = connection_error

    with pytest.raises(OpenWebIfConnectionError):
        run(session.async_set_power(False))


def test_mute_toggles_only_when_desired_differs() -> None:
    session = tracking_session()

    assert run(session.async_set_mute(False)) is False
    assert run(session.async_set_mute(True)) is True

    assert session.api.commands() == [("mute", None)]


def test_mute_is_noop_when_powered_off() -> None:
    session = _off_session()

    assert run(session.async_set_mute(False)) is False
    assert session.api.commands() == []


@pytest.mark.parametrize("requested", [0, 100])
def test_volume_boundaries_use_cached_volume(requested) -> None:
    session = tracking_session()

    assert run(session.async_set_volume(requested)) is True
    assert session.api.commands() == [("volume", 30)]


@pytest.mark.parametrize("requested", [1, 55, 99])
def test_volume_in_range_passes_through(requested) -> None:
    session = tracking_session()

    run(session.async_set_volume(requested))

    assert session.api.commands() == [("volume", requested)]


def test_channel_set_zaps_configured_reference() -> None:
    session = tracking_session()

    assert run(session.async_set_channel(3)) is True
    assert session.api.commands() == [("zap", "ref4")]


def test_channel_out_of_range_is_rejected() -> None:
    session = tracking_session()

    with pytest.raises(InvalidChannelError):
        run(session.async_set_channel(7))
    with pytest.raises(InvalidChannelError):
        run(session.async_set_channel(-1))

    assert session.api.commands() == []


def test_commands_are_noops_while_off() -> None:
    session = _off_session()

    assert run(session.async_set_volume(40)) is False
    assert run(session.async_set_channel(1)) is False
    assert run(session.async_send_remote_key(RemoteKey.SELECT)) is False
    assert run(session.async_volume_step(True)) is False
    assert run(session.async_set_info_menu(True)) is False
    assert run(session.async_set_power(False)) is False

    assert session.api.commands() == []


def test_remote_key_table() -> None:
    session = tracking_session()

    run(session.async_send_remote_key(RemoteKey.ARROW_UP))
    run(session.async_send_remote_key("select"))
    run(session.async_send_remote_key(RemoteKey.BACK))
    run(session.async_send_remote_key(RemoteKey.PLAY_PAUSE))

    assert session.api.commands() == [
        ("remote", "103"),
        ("remote", "352"),
        ("remote", "174"),
        ("remote", "164"),
    ]


def test_unknown_remote_key_raises() -> None:
    session = tracking_session()

    with pytest.raises(ValueError):
        run(session.async_send_remote_key("teleport"))


def test_information_key_follows_switch() -> None:
    normal = tracking_session()
    swapped = tracking_session(switch_info_menu=True)

    run(normal.async_send_remote_key(RemoteKey.INFORMATION))
    run(swapped.async_send_remote_key(RemoteKey.INFORMATION))

    assert normal.api.commands() == [("remote", "139")]
    assert swapped.api.commands() == [("remote", "358")]


def test_volume_step_codes() -> None:
    session = tracking_session()

    run(session.async_volume_step(True))
    run(session.async_volume_step(False))

    assert session.api.commands() == [("remote", "115"), ("remote", "114")]


def test_info_menu_show_alternates() -> None:
    session = tracking_session()

    run(session.async_set_info_menu(True))
    assert session.info_menu_shown is True
    run(session.async_set_info_menu(True))
    assert session.info_menu_shown is False
    run(session.async_set_info_menu(False))

    assert session.api.commands() == [
        ("remote", "358"),
        ("remote", "174"),
        ("remote", "174"),
    ]


def test_info_menu_show_with_switch_uses_menu_key() -> None:
    session = tracking_session(switch_info_menu=True)

    run(session.async_set_info_menu(True))

    assert session.api.commands() == [("remote", "139")]


def test_remote_failure_is_logged_not_raised(connection_error) -> None:
    session = tracking_session()
    session.api.command_error = connection_error

    assert run(session.async_send_remote_key(RemoteKey.SELECT)) is False
    assert run(session.async_volume_step(False)) is False


def test_capability_table_routes_to_dispatcher() -> None:
    session = tracking_session()

    assert session.get(Capability.POWER) is True
    assert session.get("volume") == 30
    assert session.get(Capability.ACTIVE_INPUT) == 0
    assert run(session.async_set(Capability.ACTIVE_INPUT, 2)) is True
    assert run(session.async_set("remote_key", "exit")) is True

    assert session.api.commands() == [("zap", "ref3"), ("remote", "174")]


def test_capability_without_getter_raises() -> None:
    session = tracking_session()

    with pytest.raises(ValueError):
        session.get(Capability.REMOTE_KEY)
