"""
OCR Processing module for Tabsplit
Reads receipt photos in parallel horizontal bands
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Tuple

import cv2
import numpy as np
import pytesseract
from PIL import Image, ImageEnhance, ImageFilter

from config import DEFAULT_MAX_WORKERS, IMAGE_REGION_OVERLAP_PX, OCR_LANGUAGES, OCR_PSM
from data_models import ProcessingMetrics
from utils import PerformanceTimer

logger = logging.getLogger(__name__)


class ParallelOCRProcessor:
    """Parallel OCR processing of receipt images"""

    def __init__(self, num_workers: int = DEFAULT_MAX_WORKERS):
        self.num_workers = num_workers
        self.metrics = ProcessingMetrics()
        self._language = None

    def _check_languages(self) -> List[str]:
        """Available Tesseract languages"""
        try:
            return pytesseract.get_languages(config='')
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError, OSError) as e:
            logger.warning("Could not check OCR languages: %s", e)
            return ['eng']

    def _get_ocr_language(self) -> str:
        """Configured languages that Tesseract actually has, eng otherwise"""
        if self._language is None:
            available = self._check_languages()
            wanted = [lang for lang in OCR_LANGUAGES.split('+') if lang in available]
            self._language = '+'.join(wanted) or 'eng'
            logger.debug("Using OCR language %s", self._language)
        return self._language

    def preprocess_image(self, image: Image.Image) -> Image.Image:
        """Preprocess image to improve OCR accuracy"""
        if image.mode != 'L':
            image = image.convert('L')

        image = ImageEnhance.Contrast(image).enhance(2.0)
        image = image.filter(ImageFilter.SHARPEN)

        # Remove noise with bilateral filter (using OpenCV)
        img_array = np.array(image)
        img_array = cv2.bilateralFilter(img_array, 9, 75, 75)
        return Image.fromarray(img_array)

    def split_image_into_regions(self, image: Image.Image) -> List[Tuple[int, Image.Image]]:
        """Split image into overlapping horizontal bands, one per worker"""
        width, height = image.size
        bands = max(1, min(self.num_workers, height))
        region_height = height // bands
        regions = []

        for i in range(bands):
            y_start = i * region_height
            y_end = height if i == bands - 1 else (i + 1) * region_height + IMAGE_REGION_OVERLAP_PX
            regions.append((i, image.crop((0, y_start, width, min(y_end, height)))))

        return regions

    def process_region(self, region_data: Tuple[int, Image.Image]) -> str:
        """Process a single region with OCR; a failing band yields no text"""
        region_id, region_image = region_data
        logger.debug("Worker %d: processing region", region_id + 1)

        try:
            return pytesseract.image_to_string(
                region_image,
                lang=self._get_ocr_language(),
                config=f'--psm {OCR_PSM}'
            )
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError, OSError, RuntimeError) as e:
            logger.error("Worker %d: OCR failed: %s", region_id + 1, e)
            return ""

    def process_image_parallel(self, image_path: str) -> str:
        """Process image with parallel OCR workers"""
        with PerformanceTimer("OCR") as timer:
            with Image.open(image_path) as image:
                logger.info("Image loaded: %dx%d pixels", image.size[0], image.size[1])
                processed_image = self.preprocess_image(image)

            regions = self.split_image_into_regions(processed_image)
            self.metrics.regions_processed = len(regions)
            # resolve once, before the workers start
            self._get_ocr_language()

            texts = {}
            with ThreadPoolExecutor(max_workers=self.num_workers) as executor:
                future_to_region = {
                    executor.submit(self.process_region, region): region[0]
                    for region in regions
                }
                for future in as_completed(future_to_region):
                    texts[future_to_region[future]] = future.result()

        self.metrics.workers_used = self.num_workers
        self.metrics.processing_time = timer.elapsed_time

        return '\n'.join(texts[region_id] for region_id in sorted(texts))
