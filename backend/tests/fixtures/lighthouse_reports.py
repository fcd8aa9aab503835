"""
Sample Lighthouse results for testing.
"""
import copy

# Trimmed Lighthouse result covering every audit shape the adapter handles:
# passing, not applicable, zero score, savings details, missing description,
# and a reference to an audit that is not present.
SAMPLE_LHR = {
    "lighthouseVersion": "12.2.1",
    "requestedUrl": "https://example.com/",
    "finalDisplayedUrl": "https://example.com/",
    "categories": {
        "performance": {
            "id": "performance",
            "title": "Performance",
            "score": 0.57,
            "auditRefs": [
                {"id": "first-contentful-paint", "weight": 10, "group": "metrics"},
                {"id": "largest-contentful-paint", "weight": 25, "group": "metrics"},
                {"id": "render-blocking-resources", "weight": 0},
                {"id": "unused-javascript", "weight": 0},
                {"id": "network-rtt", "weight": 0},
                {"id": "audit-not-in-result", "weight": 0},
            ],
        },
        "seo": {
            "id": "seo",
            "title": "SEO",
            "score": 0.9,
            "auditRefs": [
                {"id": "document-title", "weight": 1},
                {"id": "meta-description", "weight": 1},
                {"id": "hreflang", "weight": 1},
            ],
        },
        "accessibility": {
            "id": "accessibility",
            "title": "Accessibility",
            "score": 0.88,
            "auditRefs": [
                {"id": "color-contrast", "weight": 7},
                {"id": "image-alt", "weight": 10},
                {"id": "document-title", "weight": 7},
            ],
        },
    },
    "audits": {
        "first-contentful-paint": {
            "id": "first-contentful-paint",
            "title": "First Contentful Paint",
            "description": "First Contentful Paint marks the time at which the first text or image is painted. [Learn more about the First Contentful Paint metric](https://developer.chrome.com/docs/lighthouse/performance/first-contentful-paint/).",
            "score": 1,
            "numericValue": 812.4,
        },
        "largest-contentful-paint": {
            "id": "largest-contentful-paint",
            "title": "Largest Contentful Paint",
            "description": "Largest Contentful Paint marks the time at which the largest text or image is painted. [Learn more about the Largest Contentful Paint metric](https://developer.chrome.com/docs/lighthouse/performance/lighthouse-largest-contentful-paint/)",
            "score": 0,
            "numericValue": 9120.7,
        },
        "render-blocking-resources": {
            "id": "render-blocking-resources",
            "title": "Eliminate render-blocking resources",
            "description": "Resources are blocking the first paint of your page. Consider delivering critical JS/CSS inline and deferring all non-critical JS/styles. [Learn how to eliminate render-blocking resources](https://developer.chrome.com/docs/lighthouse/performance/render-blocking-resources/).",
            "score": 0.31,
            "details": {"type": "opportunity", "overallSavingsMs": 2400, "items": []},
        },
        "unused-javascript": {
            "id": "unused-javascript",
            "title": "Reduce unused JavaScript",
            "description": "Reduce unused JavaScript and defer loading scripts until they are required. [Learn how to reduce unused JavaScript](https://developer.chrome.com/docs/lighthouse/performance/unused-javascript/).",
            "score": 0.75,
            "details": {"type": "opportunity", "overallSavingsMs": 1520, "overallSavingsBytes": 184320},
        },
        "network-rtt": {
            "id": "network-rtt",
            "title": "Network Round Trip Times",
            "description": "Network round trip times (RTT) have a large impact on performance.",
            "score": None,
        },
        "document-title": {
            "id": "document-title",
            "title": "Document has a `<title>` element",
            "description": "The title gives screen reader users an overview of the page.",
            "score": 1,
        },
        "meta-description": {
            "id": "meta-description",
            "title": "Document does not have a meta description",
            "description": "Meta descriptions may be included in search results to concisely summarize page content. [Learn more about the meta description](https://developer.chrome.com/docs/lighthouse/seo/meta-description/).",
            "score": 0,
        },
        "hreflang": {
            "id": "hreflang",
            "title": "Document has a valid `hreflang`",
            "description": "hreflang links tell search engines what version of a page they should list in search results.",
            "score": None,
        },
        "color-contrast": {
            "id": "color-contrast",
            "title": "Background and foreground colors do not have a sufficient contrast ratio.",
            "description": "Low-contrast text is difficult or impossible for many users to read. [Learn how to provide sufficient color contrast](https://dequeuniversity.com/rules/axe/4.10/color-contrast).",
            "score": 0,
        },
        "image-alt": {
            "id": "image-alt",
            "title": "Image elements do not have `[alt]` attributes",
            "score": 0.5,
        },
    },
}


def sample_lhr() -> dict:
    """Fresh copy of the sample result, safe to mutate."""
    return copy.deepcopy(SAMPLE_LHR)
