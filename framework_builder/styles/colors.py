"""Board design system colors and constants."""

from framework_builder.core.template import Category

CATEGORY_COLORS = {
    Category.CORPORATE_STRATEGY: "#3B0764",
    Category.PILLAR: "#E4E4E7",
    Category.BUSINESS_HEADER: "#3B0764",
    Category.KPI: "#FFFFFF",
    Category.STRATEGY: "#3B0764",
    Category.BUSINESS_INITIATIVE: "#E4E4E7",
    Category.FUNCTIONAL: "#3B0764",
    Category.DXC_INITIATIVE: "#3B0764",
}

TEXT_COLORS = {
    Category.CORPORATE_STRATEGY: "#FFFFFF",
    Category.PILLAR: "#000000",
    Category.BUSINESS_HEADER: "#FFFFFF",
    Category.KPI: "#000000",
    Category.STRATEGY: "#FFFFFF",
    Category.BUSINESS_INITIATIVE: "#000000",
    Category.FUNCTIONAL: "#FFFFFF",
    Category.DXC_INITIATIVE: "#FFFFFF",
}

CSS_CLASSES = {
    Category.CORPORATE_STRATEGY: "fwb-slot-header",
    Category.PILLAR: "fwb-slot-pillar",
    Category.BUSINESS_HEADER: "fwb-slot-subheader",
    Category.KPI: "fwb-slot-kpi",
    Category.STRATEGY: "fwb-slot-subheader",
    Category.BUSINESS_INITIATIVE: "fwb-slot-initiative",
    Category.FUNCTIONAL: "fwb-slot-functional",
    Category.DXC_INITIATIVE: "fwb-slot-subheader",
}

# Titles of the information-collection sections.
SECTION_TITLES = {
    Category.CORPORATE_STRATEGY: "Corporate Strategy",
    Category.PILLAR: "Strategic Pillars",
    Category.BUSINESS_HEADER: "Business Headers",
    Category.KPI: "Executive KPIs",
    Category.STRATEGY: "Business Strategies",
    Category.BUSINESS_INITIATIVE: "Business Initiatives",
    Category.FUNCTIONAL: "Functional Areas",
    Category.DXC_INITIATIVE: "DXC Initiatives",
}

# Short titles used in the draggable tile pool.
POOL_TITLES = {
    Category.CORPORATE_STRATEGY: "Corp Strategy",
    Category.PILLAR: "Pillars",
    Category.BUSINESS_HEADER: "Bus. Headers",
    Category.KPI: "KPIs",
    Category.STRATEGY: "Strategies",
    Category.BUSINESS_INITIATIVE: "Bus. Initiatives",
    Category.FUNCTIONAL: "Functional",
    Category.DXC_INITIATIVE: "DXC Initiatives",
}

EMPTY_COLOR = "#F9FAFB"
EMPTY_TEXT_COLOR = "#9CA3AF"
