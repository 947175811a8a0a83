"""Gemini-backed roast and wellbeing analysis"""

from typing import Any, Dict, List, Optional, Sequence
from datetime import datetime
import httpx
import json
import logging

from fastapi import status

from app.core.config import Settings
from app.core.exceptions import UpstreamUnavailableException

logger = logging.getLogger(__name__)

WELLBEING_SAMPLE_SIZE = 20

ROAST_SYSTEM_PROMPT = """You are a hilariously sarcastic financial advisor AI with a roast comedy style. Your job is to analyze student spending habits and provide brutally honest, funny commentary while ALSO giving genuine insights.

IMPORTANT CONTEXT:
- The "balance" is their REWARDS balance (cashback earned) - this is always good, any amount is positive!
- Focus your analysis on their PAYMENT PATTERNS - this is where the real story is
- Roast their spending choices, payment amounts, and habits - not their rewards

Your personality:
- Use LOTS of emojis (at least 3-5 per paragraph)
- Make witty observations about WHAT they're spending on
- Roast their spending priorities in a funny way
- Use Gen Z slang occasionally
- Give actual useful insights about their payment patterns
- Keep it light and entertaining
- Structure your response with clear sections using emojis as headers

Format your response with:
1. A funny opening that celebrates their rewards but questions their spending (2-3 sentences)
2. 🏆 Rewards Flex section - celebrate their cashback earnings briefly
3. 🎯 Spending Roast section - analyze and roast their payment choices (biggest section)
4. 💡 "Real Talk" section - actual useful advice about their spending patterns
5. A motivational but sarcastic closing that encourages better choices

Keep it under 250 words total. Focus heavily on analyzing PAYMENT PATTERNS for insights."""

WELLBEING_SYSTEM_PROMPT = """You are a compassionate and supportive mental health and wellbeing AI assistant. Your role is to analyze transaction patterns to identify potential stress indicators, concerning spending habits related to substance use, or other mental health concerns.

IMPORTANT GUIDELINES:
- Be supportive, non-judgmental, and empathetic
- Focus on patterns, not individual transactions
- Look for: frequent late-night transactions, transactions at bars/liquor stores/pharmacies, rapid spending increases, unusual patterns
- Consider context: students may have legitimate reasons for various transactions
- Only flag genuine concerns, not normal student spending
- Provide helpful, actionable resources

Your response must be a JSON object with this exact structure:
{
  "summary": "A brief, supportive summary (2-3 sentences) of the analysis",
  "concerns": ["Array of specific concerns detected, if any. Empty array if no concerns"],
  "resources": [
    {
      "title": "Resource name",
      "description": "Brief description",
      "url": "https://resource-url.com"
    }
  ],
  "riskLevel": "low" | "moderate" | "high"
}

Risk levels:
- "low": No concerning patterns detected, healthy spending habits
- "moderate": Some patterns that might indicate stress or concern, but could be normal
- "high": Clear patterns suggesting potential substance abuse, severe stress, or mental health concerns

Always include helpful resources for mental health support, even if risk is low. Include UK-specific resources when possible."""

FALLBACK_RESOURCES = [
    {
        "title": "Mind - Mental Health Charity",
        "description": "UK mental health charity providing advice and support",
        "url": "https://www.mind.org.uk",
    },
    {
        "title": "Samaritans",
        "description": "24/7 free confidential support for anyone in distress",
        "url": "https://www.samaritans.org",
    },
    {
        "title": "Student Minds",
        "description": "UK's student mental health charity",
        "url": "https://www.studentminds.org.uk",
    },
]

FALLBACK_SUMMARY = (
    "We've analyzed your transaction patterns. Your spending habits appear healthy overall. "
    "Remember to prioritize your mental wellbeing and reach out for support if needed."
)

RISK_LEVELS = ("low", "moderate", "high")

def fallback_analysis() -> Dict[str, Any]:
    return {
        "summary": FALLBACK_SUMMARY,
        "concerns": [],
        "resources": [dict(r) for r in FALLBACK_RESOURCES],
        "riskLevel": "low",
    }

def summarize_transactions(transactions: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Trim to the most recent 20 and flag late-night activity (22:00-04:59)"""
    summary = []
    for t in list(transactions)[:WELLBEING_SAMPLE_SIZE]:
        hour = None
        raw_date = t.get("date")
        if raw_date:
            try:
                hour = datetime.fromisoformat(str(raw_date).replace("Z", "+00:00")).hour
            except ValueError:
                hour = None
        summary.append({
            "merchant": t.get("merchant") or t.get("description"),
            "amount": t.get("amount"),
            "date": raw_date,
            "hour": hour,
            "isLateNight": hour is not None and (hour >= 22 or hour <= 4),
            "type": t.get("type") or "unknown",
        })
    return summary

def normalize_analysis(analysis: Any) -> Dict[str, Any]:
    """Fill gaps in a model reply so the response shape is always complete"""
    if not isinstance(analysis, dict):
        return fallback_analysis()
    result = fallback_analysis()
    if isinstance(analysis.get("summary"), str) and analysis["summary"].strip():
        result["summary"] = analysis["summary"]
    if isinstance(analysis.get("concerns"), list):
        result["concerns"] = [str(c) for c in analysis["concerns"]]
    resources = [
        {
            "title": str(r["title"]),
            "description": str(r.get("description") or ""),
            "url": str(r.get("url") or ""),
        }
        for r in (analysis["resources"] if isinstance(analysis.get("resources"), list) else [])
        if isinstance(r, dict) and r.get("title")
    ]
    if resources:
        result["resources"] = resources
    if analysis.get("riskLevel") in RISK_LEVELS:
        result["riskLevel"] = analysis["riskLevel"]
    return result

class GeminiClient:
    """Thin async wrapper around the Gemini generateContent endpoint"""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = settings.GEMINI_API_KEY
        self.model = settings.GEMINI_MODEL
        self.base_url = settings.GEMINI_API_URL.rstrip("/")
        self.timeout = settings.AI_TIMEOUT_SECONDS
        self.transport = transport

    async def _generate(self, system_prompt: str, user_prompt: str, json_output: bool = False) -> str:
        if not self.api_key:
            raise UpstreamUnavailableException("GEMINI_API_KEY is not configured")

        payload: Dict[str, Any] = {
            "contents": [{"parts": [{"text": user_prompt}]}],
            "systemInstruction": {"parts": [{"text": system_prompt}]},
        }
        if json_output:
            payload["generationConfig"] = {"responseMimeType": "application/json"}

        url = f"{self.base_url}/{self.model}:generateContent"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(url, params={"key": self.api_key}, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Gemini API unreachable: {e}")
            raise UpstreamUnavailableException(f"Gemini API request failed: {e}")

        if response.status_code != 200:
            logger.error(f"Gemini API error: {response.status_code} {response.text}")
            if response.status_code == 429:
                raise UpstreamUnavailableException(
                    "Rate limit exceeded. Please try again in a moment! 🐌",
                    status_code=status.HTTP_429_TOO_MANY_REQUESTS
                )
            if response.status_code in (402, 403):
                raise UpstreamUnavailableException(
                    "API key invalid or quota exceeded. Please check your Gemini API key! 💳",
                    status_code=status.HTTP_402_PAYMENT_REQUIRED
                )
            raise UpstreamUnavailableException(f"Gemini API request failed: {response.status_code}")

        data = response.json()
        try:
            return data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            logger.error(f"Unexpected Gemini API response: {data}")
            raise UpstreamUnavailableException("Unexpected response format from Gemini API")

    async def generate_roast(
        self,
        balance: float,
        monthly_earned: float,
        recent_payments: Sequence[Dict[str, Any]]
    ) -> str:
        payments = ", ".join(f"{p.get('merchant')} (£{p.get('amount')})" for p in recent_payments)
        user_prompt = (
            "Analyze this student's spending habits:\n"
            f"- Rewards Balance: £{balance:.2f} (this is good - they're earning cashback!)\n"
            f"- Monthly Rewards Earned: £{monthly_earned:.2f}\n"
            f"- Recent Payments (THIS IS WHERE YOU FOCUS): {payments}\n\n"
            "Roast their SPENDING choices and provide insights based on WHAT they're paying for and HOW MUCH!"
        )
        roast = await self._generate(ROAST_SYSTEM_PROMPT, user_prompt)
        logger.info("Generated roast successfully")
        return roast

    async def analyze_wellbeing(self, transactions: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
        """Never fails: any upstream or parse problem yields the fallback analysis"""
        summary = summarize_transactions(transactions)
        user_prompt = (
            "Analyze these transactions for wellbeing concerns:\n"
            f"{json.dumps(summary, indent=2, default=str)}\n\n"
            "Look for patterns related to:\n"
            "- Substance abuse indicators (frequent bars, liquor stores, late-night pharmacy visits)\n"
            "- Stress indicators (rapid spending changes, unusual patterns)\n"
            "- Mental health concerns (isolation patterns, concerning spending habits)\n\n"
            "Provide a JSON response with the analysis."
        )
        try:
            text = await self._generate(WELLBEING_SYSTEM_PROMPT, user_prompt, json_output=True)
            analysis = normalize_analysis(json.loads(text))
        except UpstreamUnavailableException as e:
            logger.warning(f"Wellbeing analysis fell back: {e.detail}")
            return fallback_analysis()
        except (ValueError, TypeError) as e:
            logger.warning(f"Failed to parse AI response: {e}")
            return fallback_analysis()

        logger.info("Wellbeing analysis completed successfully")
        return analysis
