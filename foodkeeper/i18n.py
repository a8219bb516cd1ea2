"""User-facing message table for the two supported languages."""

ENGLISH = "en"
CHINESE = "zh-Hans"

MESSAGES: dict[str, dict[str, str]] = {
    "ai.error.missing.api.key": {
        ENGLISH: "AI API key is not configured.",
        CHINESE: "未配置AI API密钥。",
    },
    "ai.error.invalid.configuration": {
        ENGLISH: "AI service configuration is invalid.",
        CHINESE: "AI服务配置无效。",
    },
    "ai.error.invalid.response": {
        ENGLISH: "The AI service returned an invalid response.",
        CHINESE: "AI服务返回了无效的响应。",
    },
    "ai.error.api.error": {
        ENGLISH: "AI service request failed",
        CHINESE: "AI服务请求失败",
    },
    "ai.error.daily.limit.exceeded": {
        ENGLISH: "You have used all of today's free AI recommendations.",
        CHINESE: "今日免费AI推荐次数已用完。",
    },
    "ai.upgrade.tip.description": {
        ENGLISH: "Configure your own API key to keep generating recipes, or come back tomorrow.",
        CHINESE: "配置您自己的API密钥即可继续生成食谱，或明天再来。",
    },
    "recipe.error.message": {
        ENGLISH: "Sorry, something went wrong while generating recipes. Please try again.",
        CHINESE: "抱歉，生成食谱时出现问题，请重试。",
    },
    "recipe.parse.error": {
        ENGLISH: "Could not read the recipe response. Please try again.",
        CHINESE: "无法解析食谱内容，请重试。",
    },
    "recipe.default.name": {
        ENGLISH: "AI Recommended Recipe",
        CHINESE: "AI推荐菜谱",
    },
    "unit.conversion.weight.to.g": {
        ENGLISH: "≈ {value} g",
        CHINESE: "≈ {value} 克",
    },
    "unit.conversion.volume.to.ml": {
        ENGLISH: "≈ {value} mL",
        CHINESE: "≈ {value} 毫升",
    },
    "unit.conversion.count": {
        ENGLISH: "{value} in total",
        CHINESE: "共 {value} 个",
    },
    "history.purchase": {ENGLISH: "Purchased {quantity} of {item}", CHINESE: "购买了{quantity}{item}"},
    "history.consumption": {ENGLISH: "Used {quantity} of {item}", CHINESE: "使用了{quantity}{item}"},
    "history.consumption.recipe": {ENGLISH: "for {recipe}", CHINESE: "（用于{recipe}）"},
    "history.expiration": {ENGLISH: "Discarded {quantity} of expired {item}", CHINESE: "丢弃了过期的{quantity}{item}"},
    "history.adjustment": {ENGLISH: "Adjusted {item} to {quantity}", CHINESE: "将{item}调整为{quantity}"},
    "history.recipeTrial": {ENGLISH: "Tried recipe {item}", CHINESE: "尝试了菜谱{item}"},
    "consumption.no.dishes": {ENGLISH: "No dishes found", CHINESE: "没有找到菜品"},
    "restock.warning": {
        ENGLISH: "{name} is running low: {current} left, minimum {minimum}",
        CHINESE: "{name}库存不足：剩余{current}，最低{minimum}",
    },
    "consumption.not.found": {
        ENGLISH: "{name} was not found in the inventory",
        CHINESE: "库存中没有找到{name}",
    },
    "consumption.insufficient": {
        ENGLISH: "Not enough {name}: needed {needed}, used {used}",
        CHINESE: "{name}不足：需要{needed}，实际使用{used}",
    },
    "loading.preparing": {ENGLISH: "Preparing request...", CHINESE: "正在准备请求..."},
    "loading.analyzing": {ENGLISH: "Analyzing ingredients...", CHINESE: "正在分析食材..."},
    "loading.generating": {ENGLISH: "Generating recipes...", CHINESE: "正在生成食谱..."},
    "loading.generating_progress": {ENGLISH: "AI is thinking... {percent}%", CHINESE: "AI正在思考... {percent}%"},
    "loading.formatting": {ENGLISH: "Formatting results...", CHINESE: "正在整理结果..."},
    "loading.completed": {ENGLISH: "Done!", CHINESE: "完成！"},
}


def is_english(language: str) -> bool:
    return language != CHINESE


def translate(key: str, language: str = ENGLISH, **kwargs) -> str:
    """Look up a message, falling back to English and then to the key itself."""
    entry = MESSAGES.get(key)
    if entry is None:
        return key
    text = entry.get(language) or entry[ENGLISH]
    return text.format(**kwargs) if kwargs else text
