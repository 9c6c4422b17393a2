STRATEGIST_ROLE = "You are a seasoned marketing strategist with 15+ years of experience."

NO_CSV_CONTEXT = (
    "No CSV data provided - base recommendations on industry standards and provided business information."
)

CSV_CONTEXT_TEMPLATE = """
DETAILED CSV DATA ANALYSIS:
- Total records analyzed: $total_rows
- Available data columns: $columns
- Key data insights: $insights
- Sample records: $sample_records

Use this data to create targeted segments and realistic projections.
"""

# Channel: (CPC / cost range, CTR or open rate, conversion or growth)
CHANNEL_BENCHMARKS = [
    ("Google Ads", "Average CPC $1-$5, CTR 2-5%, Conversion rate 2-4%"),
    ("Facebook Ads", "CPC $0.50-$3, CTR 1-2%, Conversion rate 1-3%"),
    ("Email Marketing", "Open rate 15-25%, CTR 2-5%, Lists grow 10-25% monthly"),
    ("SEO", "Takes 3-6 months, can drive 20-40% of traffic long-term"),
    ("Influencer Marketing", "Micro-influencers $100-$500 per 10k followers"),
]

STRATEGY_OUTPUT_SCHEMA = """
{
  "campaigns": [
    {
      "name": "Specific Campaign Name",
      "channel": "Email|Social Media|SEO|PPC|Content Marketing|Influencer Marketing",
      "budget": number,
      "timeline": "X weeks",
      "expectedReach": number,
      "description": "Detailed 2-3 sentence description",
      "costBreakdown": "Specific breakdown: Ad spend $X, Tools $Y, Creative $Z"
    }
  ],
  "budgetAllocation": [
    {
      "category": "Category Name",
      "amount": number,
      "percentage": number,
      "explanation": "Detailed justification with specific costs"
    }
  ],
  "targetSegments": [
    {
      "name": "Specific Segment Name",
      "size": number,
      "characteristics": ["specific trait 1", "specific trait 2", "specific trait 3"],
      "reasoning": "Why this segment is valuable and how CSV data supports it"
    }
  ],
  "actionableTips": [
    "Week 1-2: Specific action with expected outcome",
    "Week 3-4: Next specific action with timeline",
    "Month 2: Specific milestone and optimization",
    "Month 3: Scaling action based on results"
  ],
  "strategyOptions": [
    {
      "name": "Strategy Approach Name",
      "description": "What this strategy prioritizes and why",
      "pros": ["specific advantage 1", "specific advantage 2", "specific advantage 3"],
      "cons": ["realistic limitation 1", "realistic limitation 2"]
    }
  ]
}
"""

STRATEGY_PROMPT_TEMPLATE = """
$role Create a comprehensive, realistic marketing strategy for this business:

BUSINESS PROFILE:
- Product/Service: $product
- Monthly Marketing Budget: $budget
- Target Customers: $customers
- Growth Objective: $growth_goal

$csv_context

CRITICAL REQUIREMENTS - BE REALISTIC AND SPECIFIC:

1. CAMPAIGN STRATEGY (4-6 campaigns):
   - Use REAL industry benchmarks for costs and performance
   - For budget under $$$low_ceiling: Focus on organic + low-cost paid
   - For budget $$$low_ceiling-$$$high_floor: Mix of paid social, Google Ads, email
   - For budget $$$high_floor+: Include influencer marketing, premium tools
   - Calculate realistic CTR, conversion rates, and CAC for each channel
   - Base reach calculations on actual ad spend formulas

2. DETAILED BUDGET BREAKDOWN:
   - Account for setup costs, monthly fees, creative costs, management time
   - Include specific tool costs (Canva Pro $$15/month, Mailchimp $$20-$$300/month, etc.)
   - Factor in 15-20% buffer for testing and optimization
   - Show exactly where every dollar goes
   - Allocation percentages must sum to 100 and amounts must sum to the monthly budget

3. REALISTIC AUDIENCE TARGETING:
   - Use CSV data to create specific customer personas
   - Calculate addressable market size based on demographics
   - Include lookalike audience sizing
   - Factor in competition and market saturation

4. ACTIONABLE IMPLEMENTATION ROADMAP:
   - Week-by-week action plan for first 12 weeks
   - Specific KPIs to track and realistic targets
   - Required tools, accounts, and setup tasks
   - Team requirements or outsourcing needs

5. STRATEGIC OPTIONS:
   - Growth-focused vs Brand-building vs Performance-driven approaches
   - Include realistic timelines to see results (usually 3-6 months)
   - Honest pros/cons based on budget constraints

IMPORTANT CALCULATION GUIDELINES:
$benchmarks

Make all numbers realistic and defensible. Avoid inflated projections.

Return ONLY valid JSON in this exact structure:
$schema
"""
