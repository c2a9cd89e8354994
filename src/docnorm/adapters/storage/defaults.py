"""Built-in templates seeded into the template repository."""

from ...domain.models import Template, TemplateType

LEGAL_CONTRACT = """\
CONTRACT AGREEMENT

This Agreement is entered into on {{agreement_date}} between:

PARTY A: {{party_a_name}}
Address: {{party_a_address}}
Contact: {{party_a_contact}}

PARTY B: {{party_b_name}}
Address: {{party_b_address}}
Contact: {{party_b_contact}}

TERMS AND CONDITIONS:
{{terms}}

PAYMENT TERMS:
{{payment_terms}}

DURATION:
This agreement shall commence on {{start_date}} and terminate on {{end_date}}.

SIGNATURES:
Party A: _________________ Date: _______
Party B: _________________ Date: _______"""

BUSINESS_PROPOSAL = """\
BUSINESS PROPOSAL

Prepared for: {{client_name}}
Prepared by: {{company_name}}
Date: {{date}}

EXECUTIVE SUMMARY:
{{summary}}

PROJECT OVERVIEW:
{{project_description}}

OBJECTIVES:
{{objectives}}

DELIVERABLES:
{{deliverables}}

TIMELINE:
{{timeline}}

BUDGET:
{{budget}}

NEXT STEPS:
{{next_steps}}"""

INVOICE = """\
INVOICE

Invoice Number: {{invoice_number}}
Invoice Date: {{invoice_date}}
Due Date: {{due_date}}

FROM:
{{issuer_name}}
{{issuer_address}}

BILL TO:
{{customer_name}}
{{customer_address}}

ITEMS:
{{line_items}}

Subtotal: {{subtotal}}
Tax: {{tax}}
Total Amount Due: {{total}}

PAYMENT INSTRUCTIONS:
{{payment_instructions}}"""

MEDICAL_REPORT = """\
MEDICAL REPORT

Patient: {{patient_name}}
Date of Birth: {{date_of_birth}}
Date of Visit: {{visit_date}}
Physician: {{physician}}

CHIEF COMPLAINT:
{{chief_complaint}}

FINDINGS:
{{findings}}

DIAGNOSIS:
{{diagnosis}}

TREATMENT PLAN:
{{treatment_plan}}

FOLLOW-UP:
{{follow_up}}"""

TECHNICAL_REPORT = """\
TECHNICAL REPORT

Title: {{title}}
Author: {{author}}
Date: {{date}}
Version: {{version}}

# Abstract
{{abstract}}

# Background
{{background}}

# Results
{{results}}

# Conclusions
{{conclusions}}

# References
{{references}}"""


def default_templates() -> list[Template]:
    return [
        Template("legal-contract", LEGAL_CONTRACT, "Standard legal contract template", TemplateType.LEGAL),
        Template("business-proposal", BUSINESS_PROPOSAL, "Business proposal template", TemplateType.BUSINESS),
        Template("invoice", INVOICE, "Invoice with line items and totals", TemplateType.BUSINESS),
        Template("medical-report", MEDICAL_REPORT, "Clinical visit report", TemplateType.MEDICAL),
        Template("technical-report", TECHNICAL_REPORT, "Technical report with sections", TemplateType.TECHNICAL),
    ]
