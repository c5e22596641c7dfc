"""Tests for option and record resolution."""

from __future__ import annotations

import logging

import pytest

from vpc_common.api import ResolutionError
from vpc_provisioner.engine.options import OptionsResolver
from vpc_provisioner.models.types import OptionStore

from tests.helpers.fakes import FakeSource


pytestmark = pytest.mark.unit_provisioner


def test_option_store_reads_pairs_and_scalars():
    store = OptionStore({"sys_type": [3, "bx2-2x8"], "vm_target_name": "web-01", "empty": []})

    assert store.get("sys_type") == 3
    assert store.get_last("sys_type") == "bx2-2x8"
    assert store.get("vm_target_name") == "web-01"
    assert store.get_last("vm_target_name") == "web-01"
    assert store.get("empty") is None
    assert store.get("missing") is None
    assert store.get_last("empty") is None


def test_cloud_instance_id_comes_from_ems(options, source, catalog, ems):
    resolver = OptionsResolver(options, source, catalog)
    assert resolver.cloud_instance_id() == ems.uid_ems


def test_cloud_instance_id_without_ems_raises(options, catalog):
    resolver = OptionsResolver(options, FakeSource(ext_management_system=None), catalog)
    with pytest.raises(ResolutionError):
        resolver.cloud_instance_id()


def test_vm_image_is_looked_up_once(options, source, catalog, template):
    resolver = OptionsResolver(options, source, catalog)

    assert resolver.vm_image() is template
    assert resolver.vm_image() is template
    assert catalog.lookups == 1


def test_missing_vm_image_is_logged_and_absent(source, catalog, caplog):
    caplog.set_level(logging.INFO)
    resolver = OptionsResolver({"src_vm_id": [7, "gone"]}, source, catalog)

    assert resolver.vm_image() is None
    assert "OptionsResolver.vm_image no template found with id 7" in caplog.text


def test_vm_image_lookup_failure_is_logged(options, source, caplog):
    class BrokenCatalog:
        def find_by_id(self, template_id):
            raise RuntimeError("database unavailable")

    resolver = OptionsResolver(options, source, BrokenCatalog(), component="VpcProvision")

    assert resolver.vm_image() is None
    assert "VpcProvision.vm_image" in caplog.text
    assert "exception: database unavailable" in caplog.text


def test_log_message_levels(options, source, catalog, caplog):
    caplog.set_level(logging.INFO)
    resolver = OptionsResolver(options, source, catalog, component="VpcProvision")

    resolver.log_message("start_clone", "submitting")
    resolver.log_message("start_clone", "failed", ValueError("bad"))

    info, error = caplog.records[-2:]
    assert info.levelno == logging.INFO
    assert info.getMessage() == "VpcProvision.start_clone submitting"
    assert error.levelno == logging.ERROR
    assert error.getMessage() == "VpcProvision.start_clone failed exception: bad"
