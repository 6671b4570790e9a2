from .step_10_select_packages import SelectPackagesStep
from .step_15_prepare_output import PrepareOutputStep
from .step_20_crawl_packages import CrawlPackagesStep
from .step_30_add_dlls import AddDllsStep
from .step_40_add_system_files import AddSystemFilesStep
from .step_90_write_artifacts import WriteArtifactsStep

__all__ = [
    "SelectPackagesStep",
    "PrepareOutputStep",
    "CrawlPackagesStep",
    "AddDllsStep",
    "AddSystemFilesStep",
    "WriteArtifactsStep",
]
