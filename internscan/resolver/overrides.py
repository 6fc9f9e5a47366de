"""Known careers sites for companies whose site does not follow /careers."""

CAREER_SITE_OVERRIDES = {
    "amazon": "https://www.amazon.jobs",
    "google": "https://careers.google.com",
    "microsoft": "https://careers.microsoft.com",
    "apple": "https://jobs.apple.com",
    "meta": "https://www.metacareers.com",
    "facebook": "https://www.metacareers.com",
    "netflix": "https://jobs.netflix.com",
    "spotify": "https://www.lifeatspotify.com",
    "salesforce": "https://www.salesforce.com/careers",
    "adobe": "https://careers.adobe.com",
    "oracle": "https://www.oracle.com/careers",
    "ibm": "https://www.ibm.com/careers",
    "intel": "https://www.intel.com/content/www/us/en/jobs",
    "nvidia": "https://www.nvidia.com/en-us/about-nvidia/careers",
    "shopify": "https://www.shopify.com/careers",
    "stripe": "https://stripe.com/jobs",
    "airbnb": "https://careers.airbnb.com",
    "uber": "https://www.uber.com/careers",
    "tesla": "https://www.tesla.com/careers",
}
