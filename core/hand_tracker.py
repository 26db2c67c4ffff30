"""
HandTracker: encapsulates all MediaPipe logic.
The rest of the application never imports mediapipe directly, and only the
landmark strategy ever constructs a tracker, so mediapipe stays optional.
"""
from __future__ import annotations
from typing import Dict, List, Tuple

import numpy as np

Landmark2D = Tuple[float, float]
LandmarkList = List[Landmark2D]
HandsData = Dict[str, LandmarkList]   # {"Left": [...], "Right": [...]}


class HandTracker:
    """
    Processes an RGB frame and returns hand landmarks in normalised image
    coordinates (0..1), keyed by the side of the *image* the hand is on.

    Parameters
    ----------
    max_num_hands : int
    min_detection_confidence : float
    min_tracking_confidence : float
    """

    def __init__(
        self,
        max_num_hands: int = 2,
        min_detection_confidence: float = 0.5,
        min_tracking_confidence: float = 0.5,
    ) -> None:
        import mediapipe as mp

        self._mp_hands = mp.solutions.hands
        self._hands    = self._mp_hands.Hands(
            static_image_mode=False,
            max_num_hands=max_num_hands,
            min_detection_confidence=min_detection_confidence,
            min_tracking_confidence=min_tracking_confidence,
        )

    # ------------------------------------------------------------------
    def process(self, rgb: np.ndarray) -> HandsData:
        """
        Parameters
        ----------
        rgb : np.ndarray
            RGB frame (the sampler already converted from BGR).

        Returns
        -------
        hands_data : dict
            Landmark lists for "Left" and/or "Right".
        """
        results = self._hands.process(rgb)

        hand_list: List[LandmarkList] = []
        if results.multi_hand_landmarks:
            for hand_landmarks in results.multi_hand_landmarks:
                hand_list.append([(lm.x, lm.y) for lm in hand_landmarks.landmark])

        return assign_sides(hand_list)

    def release(self) -> None:
        self._hands.close()


def assign_sides(hand_list: List[LandmarkList]) -> HandsData:
    """
    Assign hands to image sides by wrist X: with two hands the leftmost
    wrist is "Left"; a single hand goes to the half of the image it is in.
    """
    hands_data: HandsData = {}

    if len(hand_list) == 1:
        wrist_x = hand_list[0][0][0]
        side = "Left" if wrist_x < 0.5 else "Right"
        hands_data[side] = hand_list[0]

    elif len(hand_list) >= 2:
        paired = sorted(hand_list[:2], key=lambda landmarks: landmarks[0][0])
        hands_data["Left"]  = paired[0]
        hands_data["Right"] = paired[1]

    return hands_data
