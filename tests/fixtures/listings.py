# tests/fixtures/listings.py

# Broker memo with every core CCIM metric stated explicitly.
# Expected: yield gap 1.7 -> positive / excellent / A, DCR 1.45, BER 72.5,
# NPV > 0 -> investment grade A, RECOMMENDED.
JP_FULL_LISTING = """\
物件概要
物件名：サンライズ川崎
所在地：神奈川県川崎市中原区小杉町1-1
最寄り駅：武蔵小杉駅 徒歩7分
構造：RC造
築年数：18年
総戸数：30戸
延床面積：1,850.25㎡
一棟マンション

物件価格：3億円
借入金額：240,000,000円
自己資金：60,000,000円

FCR：6.5%
K%：4.8%
CCR：9.2%
DCR：1.45倍
BER：72.5%

借入金利：1.8%
融資期間：25年
NPV：12,500,000円
割引率：5.0%
レバレッジIRR：9.5%
アンレバレッジIRR：6.8%
"""

# Raw income statement only; every ratio has to be imputed.
# NOI 26.2M / price 500M -> FCR 5.24%, ADS 20M / loan 400M -> K% 5.0%.
JP_RAW_FINANCIALS = """\
所在地：東京都渋谷区代々木1-2-3
築年数：12年
賃貸マンション

物件価格：500,000,000円
借入金額：400,000,000円
自己資金：100,000,000円
満室想定収入：36,000,000円
実効総収入：34,200,000円
運営費：8,000,000円
純営業収益：26,200,000円
年間元利返済額：20,000,000円
"""

# English memo describing a weak deal.
# Expected: yield gap -0.7 -> negative / F, DCR 1.15, BER 92, NPV < 0.
EN_NEGATIVE_LEVERAGE = """\
Property Name: Maple Court Apartments
Address: 1-2-3 Shibaura, Minato-ku, Tokyo
Nearest Station: Tamachi, 6 min walk
Building Age: 30
Total Units: 40

Purchase Price: 800 million yen
Loan Amount: 680 million yen
Equity: 120 million yen

Cap Rate: 4.2%
Market Cap Rate: 4.5%
Loan Constant: 4.9%
Cash-on-Cash Return: 2.1%
Debt Coverage Ratio: 1.15x
Break-Even Ratio: 92%

Interest Rate: 2.9%
Loan Term: 5 years
Market Vacancy: 9.5%
Exit Cap Rate: 5.0%
NPV: -15,000,000 yen
Discount Rate: 6%
"""

FCR_AND_K_ONLY = "FCR: 8.5%\nK%: 6.2%\n"

NOI_AND_PRICE_ONLY = "Net Operating Income = 3,000,000\nPurchase Price = 50,000,000\n"

DCR_ONLY = "DCR: 0.9\n"
