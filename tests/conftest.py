import io

import numpy as np
import pytest
from PIL import Image

from mu_exporter.config.export_settings import ExportSettings
from mu_exporter.core.asset_resolver import FileAssetResolver
from mu_exporter.core.binary_writer import BinaryWriter
from mu_exporter.core.context import ExportContext
from mu_exporter.utils.logger import Logger


@pytest.fixture
def quiet_logger():
    return Logger(verbose=False)


@pytest.fixture
def memory_ctx(tmp_path, quiet_logger):
    """ExportContext writing into a BytesIO; texture outputs go to tmp_path"""
    settings = ExportSettings(model_name="Part", output_dir=str(tmp_path), base_filename="model",
                              copy_textures=False)
    ctx = ExportContext(settings=settings, binw=BinaryWriter(io.BytesIO()),
                        resolver=FileAssetResolver(), logger=quiet_logger)
    return ctx


@pytest.fixture
def make_png(tmp_path):
    def _make(name, pixels):
        src_dir = tmp_path / "src"
        src_dir.mkdir(exist_ok=True)
        path = src_dir / name
        Image.fromarray(np.asarray(pixels, dtype=np.uint8)).save(path)
        return str(path)
    return _make
