from __future__ import annotations

from focusflow.domain.entities.feature import FEATURE_LABELS, FeatureDecision


def build_upsell_message(feature: str) -> str:
    label = FEATURE_LABELS.get(feature, "This feature")
    return (
        f"{label} is available exclusively for Premium members. "
        "Upgrade to unlock advanced focus modes, detailed analytics, AI-powered insights, and more."
    )


def decide_feature_access(*, is_premium: bool, feature: str) -> FeatureDecision:
    if is_premium or feature not in FEATURE_LABELS:
        return FeatureDecision(feature=feature, allowed=True, upsell=None)
    return FeatureDecision(feature=feature, allowed=False, upsell=build_upsell_message(feature))


def decide_all_features(*, is_premium: bool) -> dict[str, FeatureDecision]:
    return {
        feature: decide_feature_access(is_premium=is_premium, feature=feature)
        for feature in FEATURE_LABELS
    }
