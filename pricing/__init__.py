from .discount import discount_recommendation  # noqa: F401
from .financial import discounted_price, financial_projection, potential_loss  # noqa: F401
from .portfolio import analyze_portfolio, category_insights, performance_metrics  # noqa: F401
from .seasonal import seasonal_adjustment, seasonal_recommendation  # noqa: F401
from .temporal import (  # noqa: F401
    UNBOUNDED_DAYS,
    average_daily_sales,
    days_to_sell_stock,
    days_until_expiry,
)
from .trends import demand_volatility, restock_recommendation, sales_trend  # noqa: F401
from .engine import MarkdownEngine  # noqa: F401
