from suite_money.domain.monetary.currency_registry import default_registry

# Frequently used currencies, resolved from the default registry on first import

# Fiat
USD = default_registry().of("USD")
EUR = default_registry().of("EUR")
GBP = default_registry().of("GBP")
JPY = default_registry().of("JPY")
CHF = default_registry().of("CHF")
CAD = default_registry().of("CAD")
AUD = default_registry().of("AUD")
CZK = default_registry().of("CZK")
BHD = default_registry().of("BHD")

# Crypto
BTC = default_registry().of("BTC")
ETH = default_registry().of("ETH")

# Precious metals (pseudo-currencies)
XAU = default_registry().of("XAU")
XAG = default_registry().of("XAG")
