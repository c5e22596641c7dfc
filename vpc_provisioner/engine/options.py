"""Resolve the objects a provision request refers to."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from vpc_common.api import ResolutionError
from vpc_provisioner.models.host import SourceTemplate, TemplateCatalog, TemplateRecord
from vpc_provisioner.models.types import OptionStore
from vpc_provisioner.utils import log_message

logger = logging.getLogger(__name__)


class OptionsResolver:
    """Shared option and record lookups for one provision task."""

    def __init__(
        self,
        options: OptionStore | Mapping[str, Any],
        source: SourceTemplate,
        templates: TemplateCatalog,
        component: Optional[str] = None,
    ) -> None:
        self.options = options if isinstance(options, OptionStore) else OptionStore(options)
        self.source = source
        self._templates = templates
        self._component = component or type(self).__name__
        self._vm_image: Optional[TemplateRecord] = None
        self._vm_image_resolved = False

    def get_option(self, key: str) -> Any:
        return self.options.get(key)

    def get_option_last(self, key: str) -> Any:
        return self.options.get_last(key)

    def cloud_instance_id(self) -> str:
        """Unique id of the management system the source template belongs to."""
        ems = self.source.ext_management_system
        if ems is None:
            raise ResolutionError(
                "The source template is not attached to a management system"
            )
        return ems.uid_ems

    def vm_image(self) -> Optional[TemplateRecord]:
        """The template selected on the request, looked up once per task."""
        if self._vm_image_resolved:
            return self._vm_image
        template_id = self.get_option("src_vm_id")
        try:
            self._vm_image = self._templates.find_by_id(template_id)
        except Exception as exc:
            self.log_message("vm_image", f"template lookup for {template_id!r} failed", exc)
            return None
        self._vm_image_resolved = True
        if self._vm_image is None:
            self.log_message("vm_image", f"no template found with id {template_id!r}")
        return self._vm_image

    def log_message(
        self, method: str, msg: str = "", exception: BaseException | None = None
    ) -> None:
        log_message(logger, self._component, method, msg, exception)
