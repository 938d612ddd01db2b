import pytest
from homeassistant.exceptions import HomeAssistantError

from conftest import FakeApi, build_session, run, tracking_session
from custom_components.openwebif_tv.config_flow import ConfigFlow
from custom_components.openwebif_tv.const import DOMAIN, Capability
from custom_components.openwebif_tv.coordinator import OpenWebIfCoordinator


def _coordinator(session) -> OpenWebIfCoordinator:
    """Coordinator wired to a session without a running Home Assistant."""
    coordinator = OpenWebIfCoordinator.__new__(OpenWebIfCoordinator)
    coordinator.session = session
    coordinator.refreshes = 0
    coordinator.listener_updates = 0

    async def _refresh() -> None:
        coordinator.refreshes += 1

    def _update_listeners() -> None:
        coordinator.listener_updates += 1

    coordinator.async_request_refresh = _refresh
    coordinator.async_update_listeners = _update_listeners
    return coordinator


def test_set_failure_becomes_home_assistant_error(connection_error) -> None:
    session = tracking_session()
    session.api.command_error = connection_error
    coordinator = _coordinator(session)

    with pytest.raises(HomeAssistantError):
        run(coordinator.async_set(Capability.VOLUME, 40))

    assert coordinator.refreshes == 0


def test_sent_command_requests_refresh() -> None:
    coordinator = _coordinator(tracking_session())

    run(coordinator.async_set(Capability.POWER, False))

    assert coordinator.session.api.commands() == [("powerstate", "5")]
    assert coordinator.refreshes == 1


def test_failed_poll_returns_unchanged_state(connection_error) -> None:
    session = tracking_session()
    coordinator = _coordinator(session)
    before = run(coordinator._async_update_data())

    session.api.status = connection_error
    after = run(coordinator._async_update_data())

    assert after is before
    assert coordinator.listener_updates == 0


def test_going_online_updates_listeners(connection_error) -> None:
    api = FakeApi()
    api.status = connection_error
    session = build_session(api)
    coordinator = _coordinator(session)

    state = run(coordinator._async_update_data())

    assert session.tracking is True
    assert state is session.state
    assert coordinator.listener_updates == 1


def test_offline_poll_leaves_listeners_alone(connection_error) -> None:
    api = FakeApi()
    api.info_error = connection_error
    coordinator = _coordinator(build_session(api))

    run(coordinator._async_update_data())

    assert coordinator.session.tracking is False
    assert coordinator.listener_updates == 0


def _flow() -> ConfigFlow:
    flow = ConfigFlow()
    flow.hass = None
    flow.context = {"source": "import"}
    flow.flow_id = "import_flow"
    flow.handler = DOMAIN
    return flow


def test_import_of_invalid_device_aborts() -> None:
    flow = _flow()

    result = run(
        flow.async_step_import(
            {
                "name": "Box",
                "host": "box.local",
                "channels": [
                    {"name": "One", "reference": "ref1"},
                    {"name": "Again", "reference": "ref1"},
                ],
            }
        )
    )

    assert result["type"] == "abort"
    assert result["reason"] == "invalid_config"
