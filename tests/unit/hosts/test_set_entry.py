from __future__ import annotations

from hostility.hosts import HostsFile

BASE_CONTENT = "\n".join(
    [
        "127.0.0.1 localhost",
        "192.168.64.1 host1",
        "192.168.64.2 host2.landomain host2",
    ]
)


def _parsed() -> HostsFile:
    hosts_file = HostsFile()
    hosts_file.parse(BASE_CONTENT)
    return hosts_file


def test_set_existing_host_is_a_no_op() -> None:
    hosts_file = _parsed()

    assert hosts_file.set_entry("192.168.64.2", "host2.landomain") is False
    assert hosts_file.get() == BASE_CONTENT
    assert hosts_file.has_changed() is False


def test_set_new_ip_address_appends_a_line() -> None:
    hosts_file = _parsed()

    assert hosts_file.set_entry("192.168.64.4", "host4.landomain") is True
    assert hosts_file.set_entry("192.168.64.4", "host4") is True

    assert hosts_file.get() == BASE_CONTENT + "\n192.168.64.4 host4.landomain host4"
    assert hosts_file.ip_addresses_for_host("host4") == ("192.168.64.4",)


def test_set_twice_returns_true_then_false() -> None:
    hosts_file = _parsed()

    assert hosts_file.set_entry("192.168.64.1", "host1.alias") is True
    after_first = hosts_file.get()
    assert hosts_file.set_entry("192.168.64.1", "host1.alias") is False

    assert hosts_file.get() == after_first
    assert "192.168.64.1 host1 host1.alias" in after_first


def test_set_first_moves_existing_host_to_front() -> None:
    hosts_file = HostsFile()
    hosts_file.parse("10.0.0.1 a b")

    assert hosts_file.set_entry("10.0.0.1", "b", first=True) is True

    assert hosts_file.hosts_for_ip("10.0.0.1") == ("b", "a")
    assert hosts_file.get() == "10.0.0.1 b a"
    assert hosts_file.ip_addresses_for_host("b") == ("10.0.0.1",)


def test_set_first_on_host_already_first_is_a_no_op() -> None:
    hosts_file = HostsFile()
    hosts_file.parse("10.0.0.1 a b")

    assert hosts_file.set_entry("10.0.0.1", "a", first=True) is False
    assert hosts_file.has_changed() is False


def test_set_first_inserts_new_host_before_existing_ones() -> None:
    hosts_file = _parsed()

    assert hosts_file.set_entry("192.168.64.1", "host1.alias.landomain", first=True) is True

    assert hosts_file.hosts_for_ip("192.168.64.1") == ("host1.alias.landomain", "host1")


def test_set_re_enables_a_disabled_line_in_place() -> None:
    hosts_file = _parsed()
    assert hosts_file.unset_ipaddr_if_equals("192.168.64.1") is True

    assert hosts_file.set_entry("192.168.64.1", "host9") is True

    assert hosts_file.get() == "\n".join(
        [
            "127.0.0.1 localhost",
            "192.168.64.1 host9",
            "192.168.64.2 host2.landomain host2",
        ]
    )
    assert hosts_file.ip_addresses_for_host("host1") == ()
    assert hosts_file.ip_addresses_for_host("host9") == ("192.168.64.1",)


def test_set_same_host_on_another_ip_address_is_indexed_twice() -> None:
    hosts_file = _parsed()

    assert hosts_file.set_entry("192.168.64.3", "host1") is True

    assert hosts_file.ip_addresses_for_host("host1") == ("192.168.64.1", "192.168.64.3")
