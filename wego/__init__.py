"""wego -- fetch page, component and project templates from a GitHub repo.

Quick usage::

    from wego import RemoteClient, TemplateInstaller, TemplateKind, WegoConfig

    config = WegoConfig.load()
    async with RemoteClient.from_config(config) as client:
        installer = TemplateInstaller(config, client)
        await installer.run(TemplateKind.COMPONENT, name="Button", interactive=False)
"""

from wego.client import RemoteClient
from wego.config import WegoConfig
from wego.installer import InstallResult, InstallStatus, TemplateInstaller
from wego.materializer import MaterializeReport, TreeMaterializer
from wego.models import ManifestEntry, ProjectEntry, RemoteManifest, TemplateKind
from wego.resolver import resolve_closure

__version__ = "0.1.0"

__all__ = [
    "RemoteClient",
    "WegoConfig",
    "TemplateInstaller",
    "InstallResult",
    "InstallStatus",
    "TreeMaterializer",
    "MaterializeReport",
    "ManifestEntry",
    "ProjectEntry",
    "RemoteManifest",
    "TemplateKind",
    "resolve_closure",
]
