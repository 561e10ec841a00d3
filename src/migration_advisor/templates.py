"""Statement templates for the recommendation.

Format strings use named slots: {languages}, {hosting_model}, {production},
{non_production}, {region}. Statements without slots are used verbatim.
"""

COMPLEXITY_FACTORS = (
    "Application uses {languages} - Azure native support available",
    "Current hosting model: {hosting_model}",
    "Multiple environments: {production} Prod, {non_production} Non-Prod",
    "No disaster recovery plan currently in place",
)

PREREQUISITES = (
    "Azure subscription and governance setup",
    "Network connectivity planning (ExpressRoute or VPN)",
    "Security and compliance review",
    "Application dependency mapping",
    "Performance baseline establishment",
)

KEY_RECOMMENDATIONS = (
    "Consider Azure App Service for the C# application to reduce operational overhead",
    "Implement Azure SQL Database instead of on-premises databases for better scalability",
    "Use Azure Application Gateway for load balancing and SSL termination",
    "Implement Azure Key Vault for secure credential management",
    "Set up Azure Monitor and Application Insights for comprehensive monitoring",
    "Consider Azure DevOps for CI/CD pipeline automation",
    "Deploy in {region} region for optimal performance",
)

IDENTITY_AND_ACCESS = (
    "Implement Azure Active Directory integration",
    "Enable multi-factor authentication (MFA)",
    "Use managed identities for Azure resource access",
)

NETWORK_SECURITY = (
    "Deploy within Azure Virtual Network with appropriate subnets",
    "Configure Network Security Groups (NSGs)",
    "Implement Azure Firewall or Application Gateway WAF",
)

DATA_PROTECTION = (
    "Enable encryption at rest for all storage",
    "Use Azure Key Vault for certificate and secret management",
    "Implement Azure Backup for data protection",
)

RISKS_AND_CONSIDERATIONS = (
    "Application dependency on specific on-premises systems may require additional integration work",
    "Data migration requires careful planning to minimize downtime",
    "Legacy .NET Framework applications may need modernization",
    "Current lack of DR plan requires immediate attention post-migration",
    "User training may be required for new Azure-based workflows",
)


def render(templates: tuple[str, ...], **slots: object) -> tuple[str, ...]:
    """Fill every template with the given slot values."""
    return tuple(template.format(**slots) for template in templates)
