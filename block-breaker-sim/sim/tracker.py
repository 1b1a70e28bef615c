"""Camera paddle control — follow a coloured marker with OpenCV.

Hold something brightly coloured in front of the webcam and move it left
and right; its horizontal position in the camera image is mapped onto the
playfield and pushed into the game's InputSource.
"""

from typing import Optional

import cv2
import numpy as np

from breaker.controls import InputSource

# HSV range for the marker. Default is a saturated orange.
# OpenCV hue runs 0-180.
LOWER_MARKER = np.array([5, 120, 120])
UPPER_MARKER = np.array([25, 255, 255])

# Contour filters
MIN_MARKER_AREA = 200
MAX_MARKER_AREA = 40000

# Smoothing factor for position (0-1, higher = follows faster)
SMOOTHING = 0.5

# Maximum jump distance (pixels) before a detection is treated as a different object
MAX_JUMP_DISTANCE = 200

FRAME_WIDTH = 640
FRAME_HEIGHT = 480


class MarkerTracker:
    """Finds the marker in BGR frames and reports a smoothed x in playfield units."""

    def __init__(self, playfield_width: float, mirror: bool = True,
                 lower=LOWER_MARKER, upper=UPPER_MARKER,
                 smoothing: float = SMOOTHING):
        self.playfield_width = playfield_width
        self.mirror = mirror
        self.lower = lower
        self.upper = upper
        self.smoothing = smoothing
        self.prev_x: Optional[float] = None

    def mask(self, frame: np.ndarray) -> np.ndarray:
        """Binary mask of marker-coloured pixels, lightly cleaned up."""
        hsv = cv2.cvtColor(frame, cv2.COLOR_BGR2HSV)
        mask = cv2.inRange(hsv, self.lower, self.upper)
        kernel = np.ones((5, 5), np.uint8)
        mask = cv2.erode(mask, kernel, iterations=1)
        mask = cv2.dilate(mask, kernel, iterations=2)
        return mask

    def locate(self, frame: np.ndarray) -> Optional[float]:
        """Marker centre x in image pixels, or None when nothing qualifies."""
        contours, _ = cv2.findContours(self.mask(frame), cv2.RETR_EXTERNAL,
                                       cv2.CHAIN_APPROX_SIMPLE)
        best_x = None
        best_area = 0.0
        for contour in contours:
            area = cv2.contourArea(contour)
            if area < MIN_MARKER_AREA or area > MAX_MARKER_AREA:
                continue
            m = cv2.moments(contour)
            if m["m00"] == 0:
                continue
            cx = m["m10"] / m["m00"]
            if self.prev_x is not None:
                # prev_x is in playfield units; compare in image units
                prev_img = self._to_image_x(self.prev_x, frame.shape[1])
                if abs(cx - prev_img) > MAX_JUMP_DISTANCE:
                    continue
            if area > best_area:
                best_area = area
                best_x = cx
        return best_x

    def _to_image_x(self, x: float, frame_w: int) -> float:
        img_x = x / self.playfield_width * frame_w
        return frame_w - img_x if self.mirror else img_x

    def to_playfield_x(self, image_x: float, frame_w: int) -> float:
        """Map an image column onto the playfield (mirrored like a selfie view)."""
        if self.mirror:
            image_x = frame_w - image_x
        return image_x / frame_w * self.playfield_width

    def process(self, frame: np.ndarray) -> Optional[float]:
        """Locate, convert and smooth. Returns the playfield x or None."""
        image_x = self.locate(frame)
        if image_x is None:
            return None
        x = self.to_playfield_x(image_x, frame.shape[1])
        if self.prev_x is not None:
            x = self.prev_x * (1 - self.smoothing) + x * self.smoothing
        self.prev_x = x
        return x

    def feed(self, frame: np.ndarray, source: InputSource) -> Optional[float]:
        """Process a frame and publish the result to the input source."""
        x = self.process(frame)
        if x is not None:
            source.publish_local_x(x)
        return x


def open_camera(index: int = 0):
    """Open a webcam, or return None if it is unavailable."""
    camera = cv2.VideoCapture(index)
    if not camera.isOpened():
        return None
    camera.set(cv2.CAP_PROP_FRAME_WIDTH, FRAME_WIDTH)
    camera.set(cv2.CAP_PROP_FRAME_HEIGHT, FRAME_HEIGHT)
    return camera
